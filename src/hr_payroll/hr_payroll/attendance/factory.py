from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from ..shifts.model import ShiftTime
from .strategies.base import AttendanceStrategy, ShiftWindow
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.pending_strategy import PendingStrategy


def shift_window(work_date: date, shift: ShiftTime, *, tz: Optional[tzinfo] = None) -> ShiftWindow:
    """Anchor a shift on a work date; overnight shifts end on the next day."""
    midnight = datetime.combine(work_date, time.min, tzinfo=tz)
    start = midnight + timedelta(minutes=shift.start_minutes)
    end = midnight + timedelta(minutes=shift.end_minutes)
    if shift.is_overnight:
        end += timedelta(days=1)
    return ShiftWindow(start=start, end=end)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_record(
        self,
        *,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        window: Optional[ShiftWindow],
        grace_minutes: int,
    ) -> AttendanceStrategy:
        if check_in is None or check_out is None:
            return PendingStrategy()
        if window is None:
            return NormalStrategy()

        # Exactly on the boundary is on time
        if check_in > window.start + timedelta(minutes=grace_minutes):
            return LateStrategy()
        if check_out < window.end:
            return EarlyLeaveStrategy()
        return NormalStrategy()
