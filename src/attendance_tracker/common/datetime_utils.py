from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_KEY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def date_key(value: date | datetime) -> str:
    """Render the calendar-day key attendance records are stored under."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_KEY_FORMAT)


def month_key_bounds(month: int, year: int) -> tuple[str, str]:
    """Inclusive date-key range covering a calendar month.

    The upper bound is always day 31. String comparison on YYYY-MM-DD keys
    makes it safe for shorter months: no valid date of the next month sorts
    below it.
    """
    prefix = f"{int(year):04d}-{int(month):02d}"
    return f"{prefix}-01", f"{prefix}-31"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
