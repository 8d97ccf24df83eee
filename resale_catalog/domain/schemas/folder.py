"""Pydantic schemas for upload folders."""

from datetime import datetime
from typing import Optional

from resale_catalog.domain.schemas.common import CamelModel
from resale_catalog.domain.schemas.product import ProductRead


class FolderRead(CamelModel):
    id: int
    user_id: int
    foldername: str
    number_of_uploaded_products: int
    excel_file_name: Optional[str] = None
    product_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FolderDetail(FolderRead):
    products: list[ProductRead] = []


class FolderDeleteResult(CamelModel):
    id: int
    deleted_products: int
    removed_images: int
    failed_images: list[str]
