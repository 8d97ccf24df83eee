import pytest

from resale_catalog.application.services import product_service
from resale_catalog.core.exceptions import EntityNotFoundException, ValidationException
from resale_catalog.domain.schemas.product import ProductFilter, ProductUpdate


def test_latest_row_wins_for_shared_management_number(product_factory, product_repo):
    older = product_factory("M100", title="old")
    newer = product_factory("M100", title="new")

    latest = product_service.get_product(product_repo, "M100")
    assert latest.id == newer.id

    product_service.update_product(product_repo, "M100", ProductUpdate(title="edited"))
    product_repo.db.expire_all()

    assert product_repo.get_by_id(newer.id).title == "edited"
    assert product_repo.get_by_id(older.id).title == "old"


def test_get_unknown_product_raises_not_found(product_repo):
    with pytest.raises(EntityNotFoundException) as exc:
        product_service.get_product(product_repo, "missing")
    assert exc.value.details == {"managementNumber": "missing"}


def test_partial_update_leaves_other_fields(product_factory, product_repo):
    product_factory("M1", title="keep", condition="2")

    updated = product_service.update_product(product_repo, "M1", ProductUpdate(price=1200))

    assert updated.price == 1200
    assert updated.title == "keep"
    assert updated.condition == "2"


def test_empty_update_is_rejected(product_factory, product_repo):
    product_factory("M1")
    with pytest.raises(ValidationException):
        product_service.update_product(product_repo, "M1", ProductUpdate())


def test_select_title_must_be_a_candidate(product_factory, product_repo):
    product_factory("M2", title="first", candidate_titles=["first", "second"])

    with pytest.raises(ValidationException):
        product_service.select_candidate_title(product_repo, "M2", "other")
    assert product_service.get_product(product_repo, "M2").title == "first"

    for _ in range(2):
        product = product_service.select_candidate_title(product_repo, "M2", "second")
        assert product.title == "second"


def test_append_category_level_builds_and_resets_path():
    path = product_service.append_category_level([], 1, {"category": "X"})
    assert path == ["X"]

    path = product_service.append_category_level(path, 2, {"category2": "Y"})
    assert path == ["X", "Y"]

    assert product_service.append_category_level(path, 1, {"category": "Z"}) == ["Z"]


def test_append_category_level_replaces_deeper_branch():
    path = ["X", "Y", "W"]
    assert product_service.append_category_level(path, 2, {"category2": "V"}) == ["X", "V"]
    assert product_service.append_category_level(["X", "Y"], 2, {"category2": "Y"}) == ["X", "Y"]


@pytest.mark.parametrize("level, selections", [(0, {"category": "X"}), (9, {"category9": "X"}), (2, {})])
def test_append_category_level_rejects_bad_input(level, selections):
    with pytest.raises(ValidationException):
        product_service.append_category_level([], level, selections)


def test_record_category_path(product_factory, product_repo):
    product_factory("M3", category_list=["old"])

    result = product_service.record_category_path(
        product_repo, "M3", {"category": "メンズ", "category2": "トップス", "category3": "Tシャツ"}
    )

    assert result == ["メンズ", "トップス", "Tシャツ"]
    assert product_service.get_product(product_repo, "M3").category_list == result


def test_delete_reports_image_cleanup_separately(product_factory, product_repo, image_storage):
    image_storage.save("M4_a.jpg", b"a")
    product_factory("M4", images=["M4_a.jpg", "M4_gone.jpg"])

    deletion = product_service.delete_product(product_repo, image_storage, "M4")

    assert deletion.product.management_number == "M4"
    assert deletion.images.ok
    assert sorted(deletion.images.removed) == ["M4_a.jpg", "M4_gone.jpg"]
    assert not image_storage.exists("M4_a.jpg")
    assert product_repo.get_latest_by_management_number("M4") is None


def test_delete_survives_image_removal_failure(product_factory, product_repo, image_storage, monkeypatch):
    product_factory("M5", images=["M5_a.jpg"])

    def broken_remove(path):
        raise PermissionError("read-only")

    monkeypatch.setattr("resale_catalog.infrastructure.storage.os.remove", broken_remove)

    deletion = product_service.delete_product(product_repo, image_storage, "M5")

    assert deletion.images.failed == ["M5_a.jpg"]
    assert not deletion.images.ok
    assert product_repo.get_latest_by_management_number("M5") is None


def test_bulk_delete_collects_failures(product_factory, product_repo, image_storage):
    product_factory("B1")
    product_factory("B2")

    result = product_service.delete_products(product_repo, image_storage, ["B1", "nope", "B2"])

    assert result.deleted == ["B1", "B2"]
    assert result.failed == ["nope"]
    assert (result.total_requested, result.total_deleted, result.total_failed) == (3, 2, 1)


def test_list_products_filters_and_pages(product_factory, product_repo, user):
    product_factory("L1", level="A", title="Blue shirt", user_id=user.id)
    product_factory("L2", level="B", title="Red shirt")
    product_factory("L3", level="A", title="Jeans")

    page = product_service.list_products(product_repo, ProductFilter(rank="A", page=1, limit=1))
    assert page["total"] == 2
    assert page["total_pages"] == 2
    assert [p.management_number for p in page["products"]] == ["L3"]

    searched = product_service.list_products(product_repo, ProductFilter(search="shirt"))
    assert {p.management_number for p in searched["products"]} == {"L1", "L2"}

    by_worker = product_service.list_products(product_repo, ProductFilter(worker=user.id))
    assert [p.management_number for p in by_worker["products"]] == ["L1"]


def test_malformed_date_filter_is_validation_error(product_repo):
    with pytest.raises(ValidationException):
        product_service.list_products(product_repo, ProductFilter(date="2024/01/01"))
