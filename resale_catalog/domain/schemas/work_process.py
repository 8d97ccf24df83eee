"""Pydantic schemas for WorkProcess (batch run) tracking."""

from datetime import datetime
from typing import Optional

from resale_catalog.domain.schemas.common import CamelModel


class WorkProcessRead(CamelModel):
    id: int
    user_id: Optional[int] = None
    product_ids: list[str]
    current_product_id: Optional[str] = None
    finished_products: int
    total_products: int
    is_finished: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StartProcessingRequest(CamelModel):
    work_process_id: int


class StartProcessingResponse(CamelModel):
    work_process_id: int
    total_products: int
    start_time: datetime


class UserWorkProcessStats(CamelModel):
    user_id: Optional[int] = None
    username: Optional[str] = None
    total: int = 0
    finished: int = 0
    active: int = 0


class WorkProcessStats(CamelModel):
    total: int
    finished: int
    active: int
    by_user: list[UserWorkProcessStats]
