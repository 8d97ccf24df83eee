"""Pydantic schemas for Product domain."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from resale_catalog.domain.schemas.common import CamelModel


class MeasurementType(CamelModel):
    foreign: str = ""
    japanese: str = ""


class ProductBase(CamelModel):
    title: Optional[str] = None
    level: Optional[str] = None
    measurement: Optional[str] = None
    measurement_type: Optional[MeasurementType] = None
    condition: Optional[str] = None
    category: Optional[str] = None
    shop1: Optional[str] = None
    shop2: Optional[str] = None
    shop3: Optional[str] = None
    price: Optional[float] = None


class ProductUpdate(ProductBase):
    level: Optional[str] = Field(default=None, pattern="^[ABC]$")
    price: Optional[float] = Field(default=None, ge=0)


class ProductRead(ProductBase):
    id: int
    management_number: str
    images: list[str] = []
    candidate_titles: list[str] = []
    category_list: list[str] = []
    user_id: Optional[int] = None
    folder_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductFilter(CamelModel):
    rank: Optional[str] = None
    date: Optional[str] = None
    worker: Optional[int] = None
    category: Optional[str] = None
    condition: Optional[str] = None
    search: Optional[str] = None
    folder_id: Optional[int] = None
    page: int = 1
    limit: int = 50


class ProductPage(CamelModel):
    products: list[ProductRead]
    total: int
    page: int
    limit: int
    total_pages: int


class CandidateTitlesRead(CamelModel):
    management_number: str
    candidate_titles: list[str]


class SelectTitleRequest(CamelModel):
    selected_title: str = Field(min_length=1)


class CategoryListRead(CamelModel):
    management_number: str
    category_list: list[str]


class BulkDeleteRequest(CamelModel):
    management_numbers: list[str] = Field(min_length=1)


class BulkDeleteResult(CamelModel):
    deleted: list[str]
    failed: list[str]
    total_requested: int
    total_deleted: int
    total_failed: int
