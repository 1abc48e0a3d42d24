from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_attendance_records(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records of one employee with work date in [start_date, end_date].

        Duplicates are allowed; the aggregator de-duplicates by date.
        """
        raise NotImplementedError
