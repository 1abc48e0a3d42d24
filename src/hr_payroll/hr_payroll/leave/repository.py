from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_leave_requests(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        status: RequestStatus = RequestStatus.APPROVED,
    ) -> Sequence[LeaveRequest]:
        """Requests of the employee intersecting [start_date, end_date], joined with their leave type."""
        raise NotImplementedError
