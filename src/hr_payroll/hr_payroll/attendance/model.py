from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một nhân viên trong một ngày.

    Created on check-in (status pending, no check_out) and completed on
    check-out. Records are append-only; corrections arrive as new records.
    """

    employee_id: str
    work_date: Optional[date]
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    hours_worked: Optional[float] = None
    overtime_hours: Optional[float] = None
    status: AttendanceStatus = AttendanceStatus.PENDING
    record_id: Optional[str] = None
    shift_id: Optional[str] = None

    @property
    def effective_date(self) -> Optional[date]:
        if self.work_date is not None:
            return self.work_date
        if self.check_in is not None:
            return self.check_in.date()
        return None


@dataclass(frozen=True)
class ShiftHours:
    scheduled_hours: float
    actual_raw_hours: float
    ot_requested_hours: float


@dataclass(frozen=True)
class AttendanceAggregate:
    """Monthly attendance summary consumed by payroll.

    Late and early-leave counters only cover records with a scheduled shift.
    """

    standard_work_days: int
    actual_work_days: int
    paid_leave_days: int
    total_hours: float
    total_overtime_hours: float
    overtime_by_date: dict[date, float] = field(default_factory=dict)
    late_days: int = 0
    early_leave_days: int = 0
    late_minutes: int = 0
    early_leave_minutes: int = 0

    @property
    def total_work_days(self) -> int:
        return self.actual_work_days + self.paid_leave_days
