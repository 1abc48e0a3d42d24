from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRequest, LeaveType
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_leave_requests(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        status: RequestStatus = RequestStatus.APPROVED,
    ) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lr.request_id, lr.employee_id, lr.start_date, lr.end_date, lr.status,
                       lt.leave_type_id, lt.name AS leave_type_name, lt.is_paid
                FROM leave_requests lr
                JOIN leave_types lt ON lt.leave_type_id = lr.leave_type_id
                WHERE lr.employee_id=%s
                  AND lr.status=%s
                  AND lr.start_date <= %s
                  AND lr.end_date >= %s
                ORDER BY lr.start_date
                """,
                (str(employee_id), status.value, end_date, start_date),
            )
            rows = fetchall(cur)

        return [
            LeaveRequest(
                request_id=str(r["request_id"]),
                employee_id=str(r["employee_id"]),
                start_date=r["start_date"],
                end_date=r["end_date"],
                status=RequestStatus(r["status"]),
                leave_type=LeaveType(
                    leave_type_id=str(r["leave_type_id"]),
                    name=r.get("leave_type_name") or "",
                    is_paid=bool(r.get("is_paid")),
                ),
            )
            for r in rows
        ]
