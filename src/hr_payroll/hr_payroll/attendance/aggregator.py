"""Monthly attendance aggregation for payroll.

Turns raw check-in/out records and leave requests of one employee into the
counters payroll needs. A single malformed record never aborts aggregation:
its contribution degrades to zero and a warning is logged.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.constants import DEFAULT_HOURS_PER_DAY, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_LUNCH_END, DEFAULT_LUNCH_START
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..leave.model import LeaveRequest
from ..shifts.model import ShiftTime
from .factory import AttendanceStrategyFactory, shift_window
from .hours import calculate_shift_based_hours
from .model import AttendanceAggregate, AttendanceRecord
from .strategies.base import StatusDecision

log = logging.getLogger(__name__)

HOUR_FIELDS = ("hours_worked", "overtime_hours")
NON_WORKING_STATUSES = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.REJECTED})
MAX_HOURS_PER_RECORD = 24.0


def _record_date(record: AttendanceRecord) -> Optional[date]:
    try:
        value = record.effective_date
    except (AttributeError, TypeError):
        value = None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    log.warning("Attendance record %s has no usable date, skipped", getattr(record, "record_id", None))
    return None


def _safe_hours(value, *, record: Optional[AttendanceRecord] = None, field: str = "", warn: bool = True) -> float:
    if value is None:
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        hours = math.nan

    if math.isnan(hours) or math.isinf(hours) or hours < 0:
        if warn:
            log.warning(
                "Invalid %s=%r on attendance record %s, counted as 0",
                field,
                value,
                getattr(record, "record_id", None),
            )
        return 0.0
    return hours


def count_work_days(records: Iterable[AttendanceRecord]) -> int:
    """Number of distinct dates with at least one record.

    Duplicate or double-scanned records for the same date count once.
    """
    days = {d for d in (_record_date(r) for r in records) if d is not None}
    return len(days)


def sum_hours(records: Iterable[AttendanceRecord], field: str) -> float:
    """Sum ``hours_worked`` or ``overtime_hours``; missing or invalid values count as 0."""
    if field not in HOUR_FIELDS:
        raise ValueError(f"Unsupported hours field: {field!r}")
    return sum(_safe_hours(getattr(r, field, None), record=r, field=field) for r in records)


def count_paid_leave_days(leave_requests: Iterable[LeaveRequest], month: str) -> int:
    """Days of approved, paid leave that fall inside ``month`` (YYYY-MM).

    A request crossing a month boundary only credits its days inside the
    month; a date covered by two paid requests is credited once.
    """
    first, last = month_bounds(month)
    days: set[date] = set()
    for req in leave_requests:
        if not req.is_paid_and_approved:
            continue
        days.update(req.dates_in_range(first, last))
    return len(days)


def decide_status(
    record: AttendanceRecord,
    scheduled_shift: Optional[ShiftTime],
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    """Status of one record against its scheduled shift, with minutes late or left early."""
    factory = factory or AttendanceStrategyFactory()

    window = None
    work_date = _record_date(record)
    if scheduled_shift is not None and work_date is not None and record.check_in is not None:
        window = shift_window(work_date, scheduled_shift, tz=record.check_in.tzinfo)

    strategy = factory.for_record(
        check_in=record.check_in,
        check_out=record.check_out,
        window=window,
        grace_minutes=int(grace_minutes),
    )
    return strategy.decide(check_in=record.check_in, check_out=record.check_out, window=window)


def classify_status(
    record: AttendanceRecord,
    scheduled_shift: Optional[ShiftTime],
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceStatus:
    """Derive ontime / late / early_leave / pending from the scheduled shift."""
    return decide_status(record, scheduled_shift, grace_minutes, factory=factory).status


class AttendanceAggregator:
    def __init__(
        self,
        *,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        max_hours_per_day: float = DEFAULT_HOURS_PER_DAY,
        lunch_start: str = DEFAULT_LUNCH_START,
        lunch_end: str = DEFAULT_LUNCH_END,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._grace_minutes = int(grace_minutes)
        self._max_hours_per_day = float(max_hours_per_day)
        self._lunch_start = lunch_start
        self._lunch_end = lunch_end
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _decide(self, record: AttendanceRecord, scheduled_shift: Optional[ShiftTime]) -> Optional[StatusDecision]:
        try:
            return decide_status(record, scheduled_shift, self._grace_minutes, factory=self._factory)
        except (TypeError, AttributeError, ValueError) as e:
            log.warning("Cannot classify attendance record %s: %s", record.record_id, e)
            return None

    def _with_derived_hours(
        self,
        record: AttendanceRecord,
        work_date: date,
        shifts_by_date: Optional[Mapping[date, ShiftTime]],
    ) -> AttendanceRecord:
        if record.hours_worked is not None or record.check_in is None or record.check_out is None:
            return record

        shift = (shifts_by_date or {}).get(work_date)
        try:
            if shift is not None:
                hours = calculate_shift_based_hours(
                    record.check_in,
                    record.check_out,
                    shift.start_time,
                    shift.end_time,
                    self._max_hours_per_day,
                    self._lunch_start,
                    self._lunch_end,
                ).scheduled_hours
            else:
                hours = (record.check_out - record.check_in).total_seconds() / 3600
        except (TypeError, ValueError, AttributeError, ValidationError) as e:
            log.warning("Cannot derive hours for attendance record %s: %s", record.record_id, e)
            return record

        return replace(record, hours_worked=round(min(max(hours, 0.0), MAX_HOURS_PER_RECORD), 2))

    def aggregate(
        self,
        records: Sequence[AttendanceRecord],
        leave_requests: Sequence[LeaveRequest],
        month: str,
        *,
        standard_work_days: int,
        shifts_by_date: Optional[Mapping[date, ShiftTime]] = None,
    ) -> AttendanceAggregate:
        first, last = month_bounds(month)

        in_month: list[AttendanceRecord] = []
        overtime_by_date: dict[date, float] = {}
        late_dates: set[date] = set()
        early_leave_dates: set[date] = set()
        late_minutes = 0
        early_leave_minutes = 0
        for record in records:
            work_date = _record_date(record)
            if work_date is None or not (first <= work_date <= last):
                continue
            if record.status in NON_WORKING_STATUSES:
                continue

            record = self._with_derived_hours(record, work_date, shifts_by_date)
            in_month.append(record)

            decision = self._decide(record, (shifts_by_date or {}).get(work_date))
            if decision is not None and decision.status is AttendanceStatus.LATE:
                late_dates.add(work_date)
                late_minutes += decision.minutes_off
            elif decision is not None and decision.status is AttendanceStatus.EARLY_LEAVE:
                early_leave_dates.add(work_date)
                early_leave_minutes += decision.minutes_off

            ot = _safe_hours(record.overtime_hours, warn=False)
            if ot:
                overtime_by_date[work_date] = overtime_by_date.get(work_date, 0.0) + ot

        return AttendanceAggregate(
            standard_work_days=int(standard_work_days),
            actual_work_days=count_work_days(in_month),
            paid_leave_days=count_paid_leave_days(leave_requests, month),
            total_hours=sum_hours(in_month, "hours_worked"),
            total_overtime_hours=sum_hours(in_month, "overtime_hours"),
            overtime_by_date=overtime_by_date,
            late_days=len(late_dates),
            early_leave_days=len(early_leave_dates),
            late_minutes=late_minutes,
            early_leave_minutes=early_leave_minutes,
        )
