"""Product → XLSX export service.

Handles:
- Mapping products onto the fixed listing template
- Writing the workbook (pandas + openpyxl) under the exports directory
- Recording export history and the folder's last export
"""

from typing import Any, Dict, List, Optional

import pandas as pd
import structlog

from resale_catalog.core.dates import export_timestamp
from resale_catalog.core.exceptions import EntityNotFoundException, ValidationException
from resale_catalog.domain.models.export_history import ExportHistory
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.product import ProductFilter
from resale_catalog.infrastructure.repositories.export_history_repository import SQLAlchemyExportHistoryRepository
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.storage import FileCleanup, FileStorage

logger = structlog.get_logger(__name__)

# Spreadsheet column name, in template order
EXPORT_COLUMNS = [
    "管理番号",
    "タイトル",
    "カテゴリ",
    "ランク",
    "状態",
    "採寸",
    "サイズ(海外)",
    "サイズ(日本)",
    "価格",
    "店舗1",
    "店舗2",
    "店舗3",
    "画像",
]


def export_file_name() -> str:
    return f"products_export_{export_timestamp()}.xlsx"


def _measurement_part(product: Product, key: str) -> str:
    measurement_type = product.measurement_type or {}
    return measurement_type.get(key) or ""


def _to_row(product: Product) -> Dict[str, Any]:
    category = " > ".join(product.category_list) if product.category_list else product.category
    return {
        "管理番号": product.management_number,
        "タイトル": product.title,
        "カテゴリ": category,
        "ランク": product.level or "",
        "状態": product.condition or "",
        "採寸": product.measurement or "",
        "サイズ(海外)": _measurement_part(product, "foreign"),
        "サイズ(日本)": _measurement_part(product, "japanese"),
        "価格": product.price,
        "店舗1": product.shop1 or "",
        "店舗2": product.shop2 or "",
        "店舗3": product.shop3 or "",
        "画像": ",".join(product.images or []),
    }


def _check_exportable(products: List[Product]) -> None:
    if not products:
        raise ValidationException("No products to export")
    for product in products:
        if not (product.title or "").strip() or not (product.category or "").strip():
            raise ValidationException(
                f"Product {product.management_number} is missing a title or category",
                details={"managementNumber": product.management_number},
            )


def build_dataframe(products: List[Product]) -> pd.DataFrame:
    return pd.DataFrame([_to_row(p) for p in products], columns=EXPORT_COLUMNS)


def export_products(
    products: ProductRepository,
    history: SQLAlchemyExportHistoryRepository,
    folders: SQLAlchemyFolderRepository,
    storage: FileStorage,
    filters: ProductFilter,
    user_id: Optional[int] = None,
) -> ExportHistory:
    """Write the filtered products to a new workbook and record the export."""
    if filters.folder_id is not None and folders.get_by_id(filters.folder_id) is None:
        raise EntityNotFoundException("Folder not found", details={"folderId": filters.folder_id})

    items = products.list_for_export(filters)
    _check_exportable(items)

    file_name = export_file_name()
    storage.ensure_dir()
    build_dataframe(items).to_excel(storage.path_for(file_name), index=False, engine="openpyxl")

    record = history.create({
        "user_id": user_id,
        "file_name": file_name,
        "file_url": f"/exports/{file_name}",
    })
    if filters.folder_id is not None:
        folders.set_excel_file_name(filters.folder_id, file_name)

    logger.info("Products exported", file_name=file_name, rows=len(items), user_id=user_id)
    return record


def list_history(history: SQLAlchemyExportHistoryRepository, user_id: Optional[int] = None) -> List[ExportHistory]:
    return history.list_newest_first(user_id=user_id)


def delete_history(
    history: SQLAlchemyExportHistoryRepository,
    storage: FileStorage,
    history_id: int,
) -> FileCleanup:
    record = history.get_by_id(history_id)
    if record is None:
        raise EntityNotFoundException("Export history not found", details={"historyId": history_id})

    file_name = record.file_name
    history.delete(record.id)
    cleanup = storage.remove_many([file_name])
    if not cleanup.ok:
        logger.warning("Export file could not be removed", file_name=file_name)
    return cleanup
