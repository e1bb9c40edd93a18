"""Date parsing and range utilities"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """
    Parse an ISO-8601 date (YYYY-MM-DD) or pass a date through.

    Datetimes are truncated to their date part.

    Raises:
        ValueError: If the value is missing or not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected ISO date string, got {value!r}")
    return date.fromisoformat(value.strip())


def is_within_range(day: date, start: Optional[date] = None, end: Optional[date] = None) -> bool:
    """Inclusive range check; a missing bound is unbounded on that side"""
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True
