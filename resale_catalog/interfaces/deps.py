"""
API Dependencies.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from resale_catalog.application.services.batch_orchestrator import BatchOrchestrator
from resale_catalog.config import get_settings
from resale_catalog.domain.models.category import Category
from resale_catalog.domain.models.export_history import ExportHistory
from resale_catalog.domain.models.folder import Folder
from resale_catalog.domain.models.product import Product
from resale_catalog.domain.models.user import User
from resale_catalog.domain.models.work_process import WorkProcess
from resale_catalog.domain.repositories.product_repository import ProductRepository
from resale_catalog.domain.repositories.work_process_repository import WorkProcessRepository
from resale_catalog.domain.schemas.product import ProductFilter
from resale_catalog.infrastructure.database import SessionLocal, get_db
from resale_catalog.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository
from resale_catalog.infrastructure.repositories.export_history_repository import SQLAlchemyExportHistoryRepository
from resale_catalog.infrastructure.repositories.folder_repository import SQLAlchemyFolderRepository
from resale_catalog.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from resale_catalog.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from resale_catalog.infrastructure.repositories.work_process_repository import SQLAlchemyWorkProcessRepository
from resale_catalog.infrastructure.storage import get_image_storage
from resale_catalog.vision.analyzer import VisionAnalysisClient, VisionAnalyzer


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_work_process_repository(db: Session = Depends(get_db)) -> WorkProcessRepository:
    return SQLAlchemyWorkProcessRepository(db, WorkProcess)


def get_user_repository(db: Session = Depends(get_db)) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_folder_repository(db: Session = Depends(get_db)) -> SQLAlchemyFolderRepository:
    return SQLAlchemyFolderRepository(db, Folder)


def get_category_repository(db: Session = Depends(get_db)) -> SQLAlchemyCategoryRepository:
    return SQLAlchemyCategoryRepository(db, Category)


def get_export_history_repository(db: Session = Depends(get_db)) -> SQLAlchemyExportHistoryRepository:
    return SQLAlchemyExportHistoryRepository(db, ExportHistory)


@lru_cache
def get_vision_analyzer() -> VisionAnalyzer:
    """One client per process; the chat model is built on first use."""
    return VisionAnalysisClient(get_image_storage())


def get_batch_orchestrator(analyzer: VisionAnalyzer = Depends(get_vision_analyzer)) -> BatchOrchestrator:
    return BatchOrchestrator(
        session_factory=SessionLocal,
        analyzer=analyzer,
        delay_seconds=get_settings().BATCH_ITEM_DELAY_SECONDS,
    )


def get_product_filter(
    rank: Optional[str] = None,
    date: Optional[str] = None,
    worker: Optional[int] = None,
    category: Optional[str] = None,
    condition: Optional[str] = None,
    search: Optional[str] = None,
    folder_id: Optional[int] = Query(None, alias="folderId"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
) -> ProductFilter:
    """Query-string filters shared by the listing and the export."""
    return ProductFilter(
        rank=rank,
        date=date,
        worker=worker,
        category=category,
        condition=condition,
        search=search,
        folder_id=folder_id,
        page=page,
        limit=limit,
    )
