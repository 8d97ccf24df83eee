"""Pydantic schemas for workers."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from resale_catalog.domain.schemas.common import CamelModel


class UserWrite(CamelModel):
    username: str


class UserRead(CamelModel):
    id: int
    username: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserBulkDeleteRequest(CamelModel):
    ids: list[int] = Field(min_length=1)


class UserBulkDeleteResult(CamelModel):
    deleted: list[int]
    failed: list[int]
