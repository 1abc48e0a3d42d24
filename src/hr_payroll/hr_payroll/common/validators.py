from __future__ import annotations

import re

from ..core.exceptions import InvalidTimeFormatError
from .datetime_utils import parse_month

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def require_time_format(value: str, field_name: str) -> str:
    """Accept H:MM, HH:MM or HH:MM:SS wall-clock strings."""
    m = _TIME_RE.match(str(value or "").strip())
    if not m:
        raise InvalidTimeFormatError(f"{field_name} không hợp lệ (HH:MM): {value!r}")

    hours, minutes, seconds = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise InvalidTimeFormatError(f"{field_name} không hợp lệ (HH:MM): {value!r}")
    return str(value).strip()


def require_month(value: str) -> str:
    parse_month(value)
    return value.strip()
