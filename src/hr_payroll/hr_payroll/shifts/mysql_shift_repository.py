from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..core.exceptions import InvalidTimeFormatError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import ShiftTime
from .repository import ShiftRepository

log = logging.getLogger(__name__)


def _row_to_shift(r: dict[str, Any]) -> Optional[ShiftTime]:
    try:
        start = normalize_mysql_time(r["start_time"])
        end = normalize_mysql_time(r["end_time"])
        return ShiftTime(
            start_time=start.strftime("%H:%M:%S"),
            end_time=end.strftime("%H:%M:%S"),
            name=r.get("shift_name"),
            id=str(r["shift_id"]),
        )
    except (InvalidTimeFormatError, ValueError, TypeError, AttributeError) as e:
        log.warning("Skipping shift %s with invalid time: %s", r.get("shift_id"), e)
        return None


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_branch(self, branch_id: str) -> Sequence[ShiftTime]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time
                FROM shifts
                WHERE branch_id=%s AND is_active=1
                ORDER BY start_time
                """,
                (str(branch_id),),
            )
            rows = fetchall(cur)
        return [s for s in (_row_to_shift(r) for r in rows) if s is not None]

    def get_by_ids(self, shift_ids: Iterable[str]) -> Sequence[ShiftTime]:
        ids = [str(i) for i in dict.fromkeys(shift_ids)]
        if not ids:
            return []

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT shift_id, shift_name, start_time, end_time
                FROM shifts
                WHERE shift_id IN ({placeholders})
                """,
                tuple(ids),
            )
            rows = fetchall(cur)
        return [s for s in (_row_to_shift(r) for r in rows) if s is not None]
