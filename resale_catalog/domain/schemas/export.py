"""Pydantic schemas for spreadsheet export history."""

from datetime import datetime
from typing import Optional

from resale_catalog.domain.schemas.common import CamelModel


class ExportHistoryRead(CamelModel):
    id: int
    user_id: Optional[int] = None
    file_name: str
    file_url: str
    created_at: Optional[datetime] = None
