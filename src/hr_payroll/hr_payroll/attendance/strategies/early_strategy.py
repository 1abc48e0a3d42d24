from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, ShiftWindow, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Early leave on checkout (only when check-in was on time)."""

    def decide(self, *, check_in: datetime, check_out: Optional[datetime], window: Optional[ShiftWindow]) -> StatusDecision:
        minutes = 0
        if window and check_out:
            minutes = int((window.end - check_out).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, minutes_off=max(minutes, 0))
