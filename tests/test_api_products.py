import io
import os

import pandas as pd

from resale_catalog.application.services.export_service import EXPORT_COLUMNS
from resale_catalog.config import get_settings


def test_product_listing_is_camel_case_and_paginated(client, product_factory):
    product_factory("P1", level="A", title="one")
    product_factory("P2", level="B", title="two")

    response = client.get("/api/products", params={"rank": "A", "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["totalPages"] == 1
    assert body["products"][0]["managementNumber"] == "P1"


def test_product_crud_on_latest_row(client, product_factory, image_storage):
    image_storage.save("P9_a.jpg", b"img")
    product_factory("P9", title="first upload")
    product_factory("P9", images=["P9_a.jpg"], title="second upload")

    assert client.get("/api/products/P9").json()["title"] == "second upload"

    updated = client.put("/api/products/P9", json={"title": "edited", "price": 980, "level": "C"})
    assert updated.status_code == 200
    assert updated.json()["title"] == "edited"
    assert updated.json()["level"] == "C"

    assert client.put("/api/products/P9", json={"level": "Z"}).status_code == 400
    assert client.put("/api/products/P9", json={"price": -1}).status_code == 400

    deleted = client.delete("/api/products/P9")
    assert deleted.status_code == 200
    assert deleted.json()["removedImages"] == ["P9_a.jpg"]
    assert deleted.json()["failedImages"] == []
    assert not image_storage.exists("P9_a.jpg")

    # The older row becomes the latest again
    assert client.get("/api/products/P9").json()["title"] == "first upload"


def test_unknown_product_is_404_with_error_body(client):
    response = client.get("/api/products/none")

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "EntityNotFoundException"
    assert error["path"] == "/api/products/none"
    assert error["details"] == {"managementNumber": "none"}


def test_bulk_delete(client, product_factory):
    product_factory("D1")
    product_factory("D2")

    response = client.post("/api/products/bulk-delete", json={"managementNumbers": ["D1", "D2", "D3"]})

    assert response.json() == {
        "deleted": ["D1", "D2"],
        "failed": ["D3"],
        "totalRequested": 3,
        "totalDeleted": 2,
        "totalFailed": 1,
    }
    assert client.post("/api/products/bulk-delete", json={"managementNumbers": []}).status_code == 400


def test_candidate_title_review(client, product_factory):
    product_factory("T1", title="a", candidate_titles=["a", "b"])

    titles = client.get("/api/products/T1/candidate-titles").json()
    assert titles == {"managementNumber": "T1", "candidateTitles": ["a", "b"]}

    rejected = client.post("/api/products/T1/select-title", json={"selectedTitle": "zzz"})
    assert rejected.status_code == 400
    assert client.get("/api/products/T1").json()["title"] == "a"

    selected = client.post("/api/products/T1/select-title", json={"selectedTitle": "b"})
    assert selected.status_code == 200
    assert selected.json()["title"] == "b"


def test_category_picker_walks_tree_and_records_path(client, categories, product_factory):
    product_factory("C1")

    assert client.get("/api/categories/top-level").json() == ["メンズ", "レディース"]

    level2 = client.post("/api/categories/level/2", json={"category": "メンズ", "productId": "C1"}).json()
    assert level2["level"] == 2
    assert [(c["name"], c["hasChildren"]) for c in level2["categories"]] == [("トップス", True), ("パンツ", True)]
    assert level2["categoryList"] == ["メンズ"]

    level3 = client.post(
        "/api/categories/level/3",
        json={"category": "メンズ", "category2": "トップス", "productId": "C1"},
    ).json()
    options = {c["name"]: c for c in level3["categories"]}
    assert options["Tシャツ"]["hasChildren"] is False
    assert options["Tシャツ"]["code"] == "100"
    assert options["シャツ"]["hasChildren"] is True
    assert options["シャツ"]["code"] is None
    assert level3["categoryList"] == ["メンズ", "トップス"]

    code = client.get(
        "/api/categories/code",
        params={"category": "メンズ", "category2": "トップス", "category3": "Tシャツ", "productId": "C1"},
    ).json()
    assert code == {"code": "100"}

    chosen = client.get("/api/products/C1/category-list").json()
    assert chosen["categoryList"] == ["メンズ", "トップス", "Tシャツ"]

    reset = client.post("/api/categories/level/2", json={"category": "レディース", "productId": "C1"}).json()
    assert reset["categoryList"] == ["レディース"]


def test_category_level_requires_parent_path(client, categories):
    response = client.post("/api/categories/level/3", json={"category": "メンズ"})
    assert response.status_code == 400


def test_export_writes_fixed_layout_and_history(client, product_factory, user):
    upload = client.post(
        "/api/batch/upload-directory",
        files=[("images", ("E1_a.jpg", b"1", "image/jpeg"))],
        data={"userId": str(user.id), "folderName": "export-me"},
    ).json()
    client.put("/api/products/E1", json={"title": "タイトル", "category": "メンズ", "level": "A", "price": 3000})

    response = client.get("/api/exports/excel", params={"folderId": upload["folderId"], "userId": user.id})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    sheet = pd.read_excel(io.BytesIO(response.content), engine="openpyxl")
    assert list(sheet.columns) == EXPORT_COLUMNS
    assert sheet.iloc[0]["管理番号"] == "E1"
    assert sheet.iloc[0]["タイトル"] == "タイトル"

    history = client.get(f"/api/exports/history/{user.id}").json()
    assert len(history) == 1
    file_name = history[0]["fileName"]
    assert file_name.startswith("products_export_") and file_name.endswith("JST.xlsx")
    assert history[0]["fileUrl"] == f"/exports/{file_name}"

    folder = client.get(f"/api/folders/{upload['folderId']}").json()
    assert folder["excelFileName"] == file_name

    assert client.delete(f"/api/exports/history/{history[0]['id']}").json()["fileRemoved"] is True
    assert client.get("/api/exports/history").json() == []
    assert not os.path.exists(os.path.join(get_settings().EXPORT_DIR, file_name))


def test_export_rejects_product_without_title(client, product_factory):
    product_factory("X1", title="ok", category="c")
    product_factory("X2", title=None, category="c")

    response = client.get("/api/exports/excel")

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"managementNumber": "X2"}
    assert client.get("/api/exports/history").json() == []
