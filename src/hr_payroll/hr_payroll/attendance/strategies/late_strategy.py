from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, ShiftWindow, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide(self, *, check_in: datetime, check_out: Optional[datetime], window: Optional[ShiftWindow]) -> StatusDecision:
        minutes = int((check_in - window.start).total_seconds() // 60) if window else 0
        return StatusDecision(status=AttendanceStatus.LATE, minutes_off=max(minutes, 0))
