"""JST date helpers for listing filters and export file names."""

from datetime import datetime, timedelta
from typing import Optional

import pytz

from resale_catalog.config import get_settings
from resale_catalog.core.exceptions import ValidationException

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)


def now_jst() -> datetime:
    return datetime.now(tz)


def to_jst(value: datetime) -> datetime:
    """Convert a datetime to JST. Naive values are taken as UTC (database default)."""
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(tz)


def jst_day_bounds(date_string: str) -> tuple[datetime, datetime]:
    """Return the [start, end) UTC instants of a YYYY-MM-DD day in JST."""
    try:
        day = datetime.strptime(date_string, "%Y-%m-%d")
    except ValueError:
        raise ValidationException(
            "Invalid date format. Expected YYYY-MM-DD",
            details={"date": date_string},
        )
    start = tz.localize(day)
    end = tz.localize(day + timedelta(days=1))
    return start.astimezone(pytz.utc), end.astimezone(pytz.utc)


def export_timestamp(value: Optional[datetime] = None) -> str:
    """e.g. 2025-12-12T20-15-39JST"""
    value = to_jst(value) if value else now_jst()
    return value.strftime("%Y-%m-%dT%H-%M-%S") + "JST"
