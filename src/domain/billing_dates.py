"""Calendar helpers shared by the billing engine

Dates arrive either as user-facing ``DD/MM/YYYY`` strings or as ISO-8601
strings. Both are normalized to local noon so that later year/month
comparisons never shift a day across a timezone boundary.
"""

from calendar import monthrange
from datetime import date, datetime
from typing import Optional, Tuple

NOON = (12, 0, 0, 0)


def parse_flexible_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse ``DD/MM/YYYY`` or ``YYYY-MM-DD[THH:MM:SS]`` into a local-noon datetime

    Zero components are rejected, and so are out-of-range ones
    (``15/13/2026``, ``31/02/2026``): nothing rolls over into the next month.

    Args:
        value: Raw date string

    Returns:
        Naive datetime at 12:00:00.000, or None when the value cannot be parsed
    """
    if not value:
        return None

    value = value.strip()

    parts = value.split("/")
    if len(parts) == 3:
        day_str, month_str, year_str = parts
        parsed = _at_noon(year_str, month_str, day_str)
        if parsed is not None:
            return parsed

    iso_date_part = value.split("T")[0]
    iso_parts = iso_date_part.split("-")
    if len(iso_parts) == 3:
        year_str, month_str, day_str = iso_parts
        return _at_noon(year_str, month_str, day_str)

    return None


def _at_noon(year_str: str, month_str: str, day_str: str) -> Optional[datetime]:
    try:
        year, month, day = int(year_str), int(month_str), int(day_str)
    except ValueError:
        return None

    if not day or not month or not year:
        return None

    try:
        return datetime(year, month, day, *NOON)
    except ValueError:
        return None


def month_bucket(value: date) -> Tuple[int, int]:
    return value.year, value.month


def clamped_due_date(year: int, month: int, anchor_day: int) -> date:
    """Due date on anchor_day, clamped to the last day of shorter months."""
    _, last_day = monthrange(year, month)
    return date(year, month, min(anchor_day, last_day))


def to_iso_date(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
