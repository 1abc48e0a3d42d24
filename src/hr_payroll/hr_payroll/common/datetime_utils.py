from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidTimeFormatError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_to_minutes(value: str) -> int:
    """Convert ``HH:MM`` or ``HH:MM:SS`` into minutes from midnight.

    Seconds are ignored and nothing is rounded. Non-numeric segments raise
    InvalidTimeFormatError; validate at the boundary before calling.
    """
    parts = str(value).split(":")
    if len(parts) < 2:
        raise InvalidTimeFormatError(f"Giờ không hợp lệ: {value!r}")
    try:
        hours = int(parts[0], 10)
        minutes = int(parts[1], 10)
    except ValueError:
        raise InvalidTimeFormatError(f"Giờ không hợp lệ: {value!r}") from None
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes from midnight as zero-padded HH:MM (wraps at 24h)."""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_month(month: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month)."""
    try:
        parsed = datetime.strptime((month or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Tháng không hợp lệ (YYYY-MM): {month!r}") from None
    return parsed.year, parsed.month


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of ``YYYY-MM``."""
    year, month_num = parse_month(month)
    last_day = calendar.monthrange(year, month_num)[1]
    return date(year, month_num, 1), date(year, month_num, last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
