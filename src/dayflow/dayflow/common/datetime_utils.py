from __future__ import annotations

from datetime import date, datetime, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Services take a clock callable defaulting to this so tests can inject time.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calendar_day(value: datetime) -> date:
    """UTC calendar day of a timestamp."""
    return as_utc(value).date()


def parse_iso_datetime(value: str) -> datetime:
    # fromisoformat() only accepts a trailing "Z" on 3.11+.
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def to_iso(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")


def parse_due_date(value: str) -> date:
    """Task due dates arrive either as a plain day or a full timestamp."""
    text = value.strip()
    if len(text) == 10:
        return parse_iso_date(text)
    return calendar_day(parse_iso_datetime(text))
