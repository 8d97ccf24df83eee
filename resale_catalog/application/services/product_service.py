"""Product service: review, edit and delete cataloged products."""

from dataclasses import dataclass
from typing import Any, Dict, List

import structlog

from resale_catalog.core.exceptions import AppError, EntityNotFoundException, ValidationException
from resale_catalog.domain.models.category import MAX_CATEGORY_LEVEL, Category
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.product import (
    BulkDeleteResult,
    ProductFilter,
    ProductRead,
    ProductUpdate,
)
from resale_catalog.infrastructure.storage import FileCleanup, FileStorage

logger = structlog.get_logger(__name__)


@dataclass
class ProductDeletion:
    """The row deletion is committed; `images` reports the file cleanup separately."""
    product: Product
    images: FileCleanup


def get_product(repo: ProductRepository, management_number: str) -> Product:
    product = repo.get_latest_by_management_number(management_number)
    if product is None:
        raise EntityNotFoundException(
            f"Product {management_number} not found",
            details={"managementNumber": management_number},
        )
    return product


def list_products(repo: ProductRepository, filters: ProductFilter) -> Dict[str, Any]:
    """Get products with filtering and pagination."""
    result = repo.get_with_filters(filters)
    result["products"] = [ProductRead.model_validate(p) for p in result["products"]]
    return result


def update_product(repo: ProductRepository, management_number: str, update: ProductUpdate) -> Product:
    fields = update.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationException("No fields to update", details={"managementNumber": management_number})
    product = repo.update_latest_by_management_number(management_number, fields)
    logger.info("Product updated", management_number=management_number, fields=sorted(fields))
    return product


def delete_product(repo: ProductRepository, storage: FileStorage, management_number: str) -> ProductDeletion:
    product = repo.delete_latest_by_management_number(management_number)
    cleanup = storage.remove_many(product.images or [])
    if not cleanup.ok:
        logger.warning(
            "Product deleted but some images could not be removed",
            management_number=management_number,
            failed=cleanup.failed,
        )
    return ProductDeletion(product=product, images=cleanup)


def delete_products(repo: ProductRepository, storage: FileStorage, management_numbers: List[str]) -> BulkDeleteResult:
    deleted: List[str] = []
    failed: List[str] = []

    for management_number in management_numbers:
        try:
            delete_product(repo, storage, management_number)
            deleted.append(management_number)
        except AppError as e:
            logger.warning("Bulk delete item failed", management_number=management_number, error=e.message)
            failed.append(management_number)

    return BulkDeleteResult(
        deleted=deleted,
        failed=failed,
        total_requested=len(management_numbers),
        total_deleted=len(deleted),
        total_failed=len(failed),
    )


def select_candidate_title(repo: ProductRepository, management_number: str, title: str) -> Product:
    product = get_product(repo, management_number)
    candidates = product.candidate_titles or []
    if title not in candidates:
        raise ValidationException(
            "Selected title is not one of the candidate titles",
            details={"managementNumber": management_number, "selectedTitle": title},
        )
    return repo.update_latest_by_management_number(management_number, {"title": title})


def append_category_level(current: List[str], level: int, selections: Dict[str, str]) -> List[str]:
    """Record the category chosen at `level` into an ordered path.

    Level 1 starts a new path. A deeper level cuts the path back to its
    parents before appending, so re-picking a level replaces that branch.
    """
    if not 1 <= level <= MAX_CATEGORY_LEVEL:
        raise ValidationException(f"Category level must be between 1 and {MAX_CATEGORY_LEVEL}")

    field = Category.level_field(level)
    name = (selections.get(field) or "").strip()
    if not name:
        raise ValidationException(f"Missing selection for {field}", details={"level": level})

    if level == 1:
        return [name]

    path = list(current or [])[: level - 1]
    if name not in path:
        path.append(name)
    return path


def record_category_selection(
    repo: ProductRepository,
    management_number: str,
    level: int,
    selections: Dict[str, str],
) -> List[str]:
    product = get_product(repo, management_number)
    category_list = append_category_level(product.category_list or [], level, selections)
    repo.update_latest_by_management_number(management_number, {"category_list": category_list})
    return category_list


def record_category_path(repo: ProductRepository, management_number: str, selections: Dict[str, str]) -> List[str]:
    """Record a complete path (levels 1..n) in one write."""
    product = get_product(repo, management_number)
    category_list: List[str] = []
    for level in range(1, MAX_CATEGORY_LEVEL + 1):
        if not selections.get(Category.level_field(level)):
            break
        category_list = append_category_level(category_list, level, selections)
    if not category_list:
        raise ValidationException("category is required", details={"managementNumber": management_number})
    repo.update_latest_by_management_number(management_number, {"category_list": category_list})
    return category_list
