"""Helpers for calendar dates."""

from collections.abc import Iterator
from datetime import date, datetime, timedelta
import re

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BR_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def coerce_date(value) -> date:
    """Normalize a date-like value to a date.

    Args:
        value: A date, a datetime, or an ISO string (YYYY-MM-DD, optionally
            followed by a time part).

    Returns:
        date: The calendar date.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip().split("T")[0].split(" ")[0]
        if _ISO_DATE.match(raw):
            return date.fromisoformat(raw)
    raise ValueError(f"Invalid date '{value}'. Expected format YYYY-MM-DD.")


def coerce_datetime(value) -> datetime | None:
    """Normalize a timestamp value read from storage."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def parse_flexible_date(value: str | None) -> date | None:
    """Parse YYYY-MM-DD or DD/MM/YYYY strings.

    Returns:
        date | None: Parsed date or None when the value is not recognised.
    """
    if not value:
        return None
    raw = value.strip()
    if _ISO_DATE.match(raw):
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None
    match = _BR_DATE.match(raw)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None
    return None


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_business_day(day: date) -> bool:
    """Return True for Monday to Friday."""
    return day.weekday() < 5


def last_business_day(reference: date | None = None) -> date:
    """Return the reference date, or the closest business day before it."""
    day = reference or date.today()
    while not is_business_day(day):
        day -= timedelta(days=1)
    return day


__all__ = [
    "coerce_date",
    "coerce_datetime",
    "parse_flexible_date",
    "iter_dates",
    "is_business_day",
    "last_business_day",
]
