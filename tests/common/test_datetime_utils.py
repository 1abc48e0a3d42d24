from __future__ import annotations

from datetime import date

import pytest

from src.hr_payroll.hr_payroll.common.datetime_utils import (
    format_minutes,
    iter_dates,
    month_bounds,
    parse_month,
    parse_time_to_minutes,
)
from src.hr_payroll.hr_payroll.core.exceptions import InvalidTimeFormatError, ValidationError


@pytest.mark.parametrize(
    "value,expected",
    [("00:00", 0), ("08:30", 510), ("23:59", 1439), ("8:05", 485), ("12:00:45", 720)],
)
def test_parse_time_to_minutes(value, expected):
    assert parse_time_to_minutes(value) == expected


@pytest.mark.parametrize("value", ["0800", "ab:cd", "12"])
def test_parse_time_to_minutes_rejects_garbage(value):
    with pytest.raises(InvalidTimeFormatError):
        parse_time_to_minutes(value)


@pytest.mark.parametrize("minutes,expected", [(0, "00:00"), (545, "09:05"), (1440, "00:00"), (1500, "01:00")])
def test_format_minutes_pads_and_wraps(minutes, expected):
    assert format_minutes(minutes) == expected


def test_month_bounds_handles_leap_february():
    assert month_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds("2025-02") == (date(2025, 2, 1), date(2025, 2, 28))


@pytest.mark.parametrize("value", ["2025-13", "2025/01", "", None])
def test_parse_month_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        parse_month(value)


def test_iter_dates_is_inclusive():
    assert list(iter_dates(date(2025, 1, 30), date(2025, 2, 1))) == [
        date(2025, 1, 30),
        date(2025, 1, 31),
        date(2025, 2, 1),
    ]
