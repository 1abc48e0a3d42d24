from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class ShiftWindow:
    """Scheduled shift anchored on a work date (end may fall on the next day)."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    minutes_off: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, check_in: datetime, check_out: Optional[datetime], window: Optional[ShiftWindow]) -> StatusDecision:
        raise NotImplementedError
