from __future__ import annotations

from datetime import datetime
from typing import Union

from ..common.datetime_utils import as_utc, parse_iso_datetime
from ..core.constants import RELATIVE_TIME_MAX_DAYS

INVALID_DATE = "Invalid Date"


def relative_time(timestamp: Union[str, datetime], now: datetime) -> str:
    """Short "time ago" label; older than a week falls back to M/D/YYYY."""

    if isinstance(timestamp, str):
        try:
            then = parse_iso_datetime(timestamp)
        except ValueError:
            return INVALID_DATE
    else:
        then = as_utc(timestamp)
    seconds = int((as_utc(now) - then).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < RELATIVE_TIME_MAX_DAYS:
        return f"{days}d ago"
    return f"{then.month}/{then.day}/{then.year}"
