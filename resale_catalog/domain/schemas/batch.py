"""Pydantic schemas for the batch upload response."""

from typing import Optional

from resale_catalog.domain.schemas.common import CamelModel


class SkippedFileRead(CamelModel):
    filename: str
    reason: str


class UploadSummary(CamelModel):
    total_files: int
    valid_files: int
    skipped_files: list[SkippedFileRead]


class ProductGroupRead(CamelModel):
    product_id: str
    image_count: int
    images: list[str]


class UploadResponse(CamelModel):
    work_process_id: int
    total_images: int
    total_products: int
    folder_id: Optional[int] = None
    upload_summary: UploadSummary
    product_groups: list[ProductGroupRead]
