from __future__ import annotations

from datetime import datetime, time, timedelta

from ..common.datetime_utils import parse_time_to_minutes
from ..core.constants import DEFAULT_HOURS_PER_DAY, DEFAULT_LUNCH_END, DEFAULT_LUNCH_START
from .model import ShiftHours


def _at(anchor: datetime, minutes: int) -> datetime:
    return datetime.combine(anchor.date(), time.min, tzinfo=anchor.tzinfo) + timedelta(minutes=minutes)


def _hours(delta: timedelta) -> float:
    return delta.total_seconds() / 3600


def calculate_shift_based_hours(
    check_in: datetime,
    check_out: datetime,
    shift_start: str,
    shift_end: str,
    max_hours_per_day: float = DEFAULT_HOURS_PER_DAY,
    lunch_start: str = DEFAULT_LUNCH_START,
    lunch_end: str = DEFAULT_LUNCH_END,
) -> ShiftHours:
    """Split clocked time into scheduled hours and OT candidate hours.

    Scheduled hours are the clocked time clipped to the shift window, minus
    the part of the lunch break inside it, capped at ``max_hours_per_day``.
    Anything clocked beyond that is reported as requested OT (approval is a
    separate step). The shift window is anchored on the check-in date; a
    shift whose end is not after its start runs into the next day.
    """
    shift_start_dt = _at(check_in, parse_time_to_minutes(shift_start))
    shift_end_dt = _at(check_in, parse_time_to_minutes(shift_end))
    if shift_end_dt <= shift_start_dt:
        shift_end_dt += timedelta(days=1)

    lunch_start_dt = _at(check_in, parse_time_to_minutes(lunch_start))
    lunch_end_dt = _at(check_in, parse_time_to_minutes(lunch_end))

    actual_raw = _hours(check_out - check_in)

    effective_start = max(check_in, shift_start_dt)
    effective_end = min(check_out, shift_end_dt)

    scheduled = 0.0
    if effective_end > effective_start:
        scheduled = _hours(effective_end - effective_start)

        lunch_from = max(effective_start, lunch_start_dt)
        lunch_to = min(effective_end, lunch_end_dt)
        if lunch_to > lunch_from:
            scheduled -= _hours(lunch_to - lunch_from)

    scheduled = min(scheduled, float(max_hours_per_day))
    ot_requested = max(actual_raw - scheduled, 0.0)

    return ShiftHours(
        scheduled_hours=round(scheduled, 2),
        actual_raw_hours=round(actual_raw, 2),
        ot_requested_hours=round(ot_requested, 2),
    )
