from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveType:
    leave_type_id: Optional[str]
    name: str
    is_paid: bool


@dataclass(frozen=True)
class LeaveRequest:
    """Đơn nghỉ phép; khoảng ngày tính cả hai đầu."""

    employee_id: str
    start_date: date
    end_date: date
    status: RequestStatus
    leave_type: LeaveType
    request_id: Optional[str] = None

    @property
    def is_paid_and_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED and bool(self.leave_type and self.leave_type.is_paid)

    def dates_in_range(self, first: date, last: date) -> list[date]:
        """Calendar days of this request that fall inside [first, last]."""
        start = max(self.start_date, first)
        end = min(self.end_date, last)
        return [start + timedelta(days=i) for i in range((end - start).days + 1)] if end >= start else []
