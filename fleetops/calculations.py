"""Helper functions for laudo expiration and score calculations."""

import math
from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse

from .bucket import Bucket

# Only day offsets inside [WINDOW_MIN_DAYS, WINDOW_MAX_DAYS] produce records
WINDOW_MIN_DAYS = -30
WINDOW_MAX_DAYS = 90
WITHIN_30_MAX_DAYS = 30
WITHIN_60_MAX_DAYS = 60

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a stored document date.

    - date/datetime: date part
    - ISO-8601 string: parsed, time part dropped
    - None, empty or unparseable: None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def days_between(expiration: date, reference: date) -> int:
    """Whole days from reference to expiration (negative = already expired)."""
    return (expiration - reference).days


def in_window(days: int) -> bool:
    """Check if a day offset is inside the actionable window."""
    return WINDOW_MIN_DAYS <= days <= WINDOW_MAX_DAYS


def bucket_for(days: int) -> Optional[Bucket]:
    """Determine the expiration bucket for a day offset."""
    if not in_window(days):
        return None
    if days < 0:
        return Bucket.EXPIRED
    if days <= WITHIN_30_MAX_DAYS:
        return Bucket.WITHIN_30
    if days <= WITHIN_60_MAX_DAYS:
        return Bucket.WITHIN_60
    return Bucket.WITHIN_90


def round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100
