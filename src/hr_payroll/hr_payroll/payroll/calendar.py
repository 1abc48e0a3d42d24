from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import iter_dates, month_bounds
from ..core.constants import DEFAULT_WEEKEND_DAYS
from ..core.enums import DayType
from .model import Holiday


class WorkCalendar:
    """Weekends and public holidays used for standard days and OT multipliers.

    Recurring holidays match on month and day only.
    """

    def __init__(self, holidays: Iterable[Holiday] = (), weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS):
        holidays = list(holidays)
        self._fixed = {h.holiday_date for h in holidays if not h.is_recurring}
        self._recurring = {(h.holiday_date.month, h.holiday_date.day) for h in holidays if h.is_recurring}
        self._weekend_days = frozenset(int(d) for d in weekend_days)

    def is_holiday(self, day: date) -> bool:
        return day in self._fixed or (day.month, day.day) in self._recurring

    def day_type(self, day: date) -> DayType:
        if self.is_holiday(day):
            return DayType.HOLIDAY
        if day.weekday() in self._weekend_days:
            return DayType.WEEKEND
        return DayType.WEEKDAY

    def standard_work_days(self, month: str) -> int:
        first, last = month_bounds(month)
        return sum(1 for d in iter_dates(first, last) if self.day_type(d) is DayType.WEEKDAY)
