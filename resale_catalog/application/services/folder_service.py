"""Folder service: browsing and deleting named upload batches."""

from typing import List, Optional

import structlog

from resale_catalog.core.exceptions import EntityNotFoundException
from resale_catalog.domain.models.folder import Folder
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.folder import FolderDeleteResult, FolderDetail, FolderRead
from resale_catalog.domain.schemas.product import ProductRead
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.storage import FileStorage

logger = structlog.get_logger(__name__)


def _require_folder(repo: SQLAlchemyFolderRepository, folder_id: int) -> Folder:
    folder = repo.get_by_id(folder_id)
    if folder is None:
        raise EntityNotFoundException("Folder not found", details={"folderId": folder_id})
    return folder


def list_folders(repo: SQLAlchemyFolderRepository, user_id: Optional[int] = None) -> List[FolderRead]:
    result = []
    for folder, count in repo.list_with_counts(user_id=user_id):
        item = FolderRead.model_validate(folder)
        item.product_count = count
        result.append(item)
    return result


def get_folder(repo: SQLAlchemyFolderRepository, products: ProductRepository, folder_id: int) -> FolderDetail:
    folder = _require_folder(repo, folder_id)
    items = products.list_by_folder(folder.id)
    detail = FolderDetail.model_validate(folder)
    detail.products = [ProductRead.model_validate(p) for p in items]
    detail.product_count = len(items)
    return detail


def delete_folder(
    repo: SQLAlchemyFolderRepository,
    products: ProductRepository,
    storage: FileStorage,
    folder_id: int,
) -> FolderDeleteResult:
    """Delete a folder together with its products, then clean up their images."""
    folder = _require_folder(repo, folder_id)

    removed = products.delete_by_folder(folder.id)
    images = [name for product in removed for name in (product.images or [])]
    repo.delete(folder.id)
    cleanup = storage.remove_many(images)

    logger.info(
        "Folder deleted",
        folder_id=folder_id,
        deleted_products=len(removed),
        removed_images=len(cleanup.removed),
        failed_images=len(cleanup.failed),
    )
    return FolderDeleteResult(
        id=folder_id,
        deleted_products=len(removed),
        removed_images=len(cleanup.removed),
        failed_images=cleanup.failed,
    )
