from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, ShiftWindow, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, normal check-out."""

    def decide(self, *, check_in: datetime, check_out: Optional[datetime], window: Optional[ShiftWindow]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
