"""Export API routes: spreadsheet generation and history."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse

from resale_catalog.application.services import export_service
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.schemas.export import ExportHistoryRead
from resale_catalog.domain.schemas.product import ProductFilter
from resale_catalog.infrastructure.repositories.export_history_repository import SQLAlchemyExportHistoryRepository
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.storage import FileStorage, get_export_storage
from resale_catalog.interfaces.deps import (
    get_export_history_repository,
    get_folder_repository,
    get_product_filter,
    get_product_repository,
)

router = APIRouter(prefix="/api/exports", tags=["Exports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/excel")
def export_excel(
    user_id: Optional[int] = Query(None, alias="userId"),
    filters: ProductFilter = Depends(get_product_filter),
    products: ProductRepository = Depends(get_product_repository),
    history: SQLAlchemyExportHistoryRepository = Depends(get_export_history_repository),
    folders: SQLAlchemyFolderRepository = Depends(get_folder_repository),
    storage: FileStorage = Depends(get_export_storage),
):
    """Generate the workbook for every product matching the filters (pagination ignored)."""
    record = export_service.export_products(products, history, folders, storage, filters, user_id=user_id)
    return FileResponse(
        storage.path_for(record.file_name),
        media_type=XLSX_MEDIA_TYPE,
        filename=record.file_name,
        headers={"X-Export-Url": record.file_url},
    )


@router.get("/history", response_model=List[ExportHistoryRead])
def all_history(history: SQLAlchemyExportHistoryRepository = Depends(get_export_history_repository)):
    return export_service.list_history(history)


@router.get("/history/{user_id}", response_model=List[ExportHistoryRead])
def history_by_user(
    user_id: int,
    history: SQLAlchemyExportHistoryRepository = Depends(get_export_history_repository),
):
    return export_service.list_history(history, user_id=user_id)


@router.delete("/history/{history_id}")
def remove_history(
    history_id: int,
    history: SQLAlchemyExportHistoryRepository = Depends(get_export_history_repository),
    storage: FileStorage = Depends(get_export_storage),
):
    cleanup = export_service.delete_history(history, storage, history_id)
    return {"message": "Export history deleted", "id": history_id, "fileRemoved": cleanup.ok}
