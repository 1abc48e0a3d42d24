from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


def _as_hours(value: Any, *, column: str, record_id: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        log.warning("attendance_records.%s=%r (id=%s) is not numeric", column, value, record_id)
        return None
    if math.isnan(hours):
        return None
    return hours


def _as_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).lower())
    except ValueError:
        log.warning("Unknown attendance status %r, treated as pending", value)
        return AttendanceStatus.PENDING


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_records(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, employee_id, work_date, check_in, check_out,
                       hours_worked, overtime_hours, status, shift_id
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date, check_in
                """,
                (str(employee_id), start_date, end_date),
            )
            rows = fetchall(cur)

        return [
            AttendanceRecord(
                record_id=str(r["record_id"]),
                employee_id=str(r["employee_id"]),
                work_date=r.get("work_date"),
                check_in=r.get("check_in"),
                check_out=r.get("check_out"),
                hours_worked=_as_hours(r.get("hours_worked"), column="hours_worked", record_id=r["record_id"]),
                overtime_hours=_as_hours(r.get("overtime_hours"), column="overtime_hours", record_id=r["record_id"]),
                status=_as_status(r.get("status")),
                shift_id=str(r["shift_id"]) if r.get("shift_id") is not None else None,
            )
            for r in rows
        ]
