"""Shift overlap detection.

Used by shift registration, approval and schedule flows. All functions are
pure; absence of overlap is reported as False / None / empty collections.
Ranges are half-open, so back-to-back shifts (08:00-12:00, 12:00-16:00) do
not overlap. An overnight shift (end < start) is split into the tail of the
day ``[start, 24:00)`` and the head of the next ``[00:00, end)``.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import format_minutes
from ..core.constants import DEFAULT_SHIFT_NAME_1, DEFAULT_SHIFT_NAME_2, MINUTES_PER_DAY
from .model import (
    OverlapConflict,
    OverlapRange,
    OverlapReport,
    ShiftDateEntry,
    ShiftDateError,
    ShiftTime,
    ShiftValidationResult,
)

MinuteRange = tuple[int, int]


class OverlapCase(str, Enum):
    NON_OVERNIGHT = "non_overnight"
    ONE_OVERNIGHT = "one_overnight"
    BOTH_OVERNIGHT = "both_overnight"


def classify_pair(shift1: ShiftTime, shift2: ShiftTime) -> OverlapCase:
    overnight = int(shift1.is_overnight) + int(shift2.is_overnight)
    if overnight == 0:
        return OverlapCase.NON_OVERNIGHT
    if overnight == 1:
        return OverlapCase.ONE_OVERNIGHT
    return OverlapCase.BOTH_OVERNIGHT


def _sub_ranges(shift: ShiftTime) -> list[MinuteRange]:
    start, end = shift.start_minutes, shift.end_minutes
    if end < start:
        return [(start, MINUTES_PER_DAY), (0, end)]
    return [(start, end)]


def _intersects(r1: MinuteRange, r2: MinuteRange) -> bool:
    return r1[0] < r2[1] and r1[1] > r2[0]


def do_shifts_overlap(shift1: ShiftTime, shift2: ShiftTime) -> bool:
    """True if the two shifts share any minute of the day.

    >>> do_shifts_overlap(ShiftTime("08:00", "12:00"), ShiftTime("11:00", "15:00"))
    True
    >>> do_shifts_overlap(ShiftTime("08:00", "12:00"), ShiftTime("12:00", "16:00"))
    False
    """
    if classify_pair(shift1, shift2) is OverlapCase.NON_OVERNIGHT:
        return _intersects(
            (shift1.start_minutes, shift1.end_minutes),
            (shift2.start_minutes, shift2.end_minutes),
        )

    return any(_intersects(r1, r2) for r1 in _sub_ranges(shift1) for r2 in _sub_ranges(shift2))


def get_overlap_ranges(shift1: ShiftTime, shift2: ShiftTime) -> list[OverlapRange]:
    """All disjoint overlapping windows, in wall-clock form.

    A window ending at midnight is joined with one starting at midnight, so
    22:00-06:00 vs 23:00-02:00 gives a single 23:00-02:00 range.
    """
    ranges = sorted(
        (max(r1[0], r2[0]), min(r1[1], r2[1]))
        for r1 in _sub_ranges(shift1)
        for r2 in _sub_ranges(shift2)
        if _intersects(r1, r2)
    )

    head = next((r for r in ranges if r[0] == 0), None)
    tail = next((r for r in ranges if r[1] == MINUTES_PER_DAY), None)
    if head is not None and tail is not None and head != tail:
        ranges.remove(head)
        ranges.remove(tail)
        ranges.insert(0, (tail[0], head[1]))

    return [OverlapRange(start=format_minutes(s), end=format_minutes(e)) for s, e in ranges]


def get_overlap_range(shift1: ShiftTime, shift2: ShiftTime) -> Optional[OverlapRange]:
    """The overlapping window of two shifts, or None.

    For two same-day shifts this is [max(start), min(end)]. For pairs involving
    an overnight shift it is the first window of get_overlap_ranges().
    """
    if not do_shifts_overlap(shift1, shift2):
        return None

    ranges = get_overlap_ranges(shift1, shift2)
    return ranges[0] if ranges else None


def get_overlapping_shift_ids(target: ShiftTime, others: Iterable[ShiftTime]) -> list[str]:
    return [s.id for s in others if s.id and do_shifts_overlap(target, s)]


def find_overlap_conflicts(shifts: Sequence[ShiftTime]) -> OverlapReport:
    """All-pairs scan; meant for the handful of shifts in one day."""
    conflicts: list[OverlapConflict] = []

    for i in range(len(shifts)):
        for j in range(i + 1, len(shifts)):
            overlap = get_overlap_range(shifts[i], shifts[j])
            if overlap:
                conflicts.append(OverlapConflict(shift1=shifts[i], shift2=shifts[j], overlap_range=overlap))

    return OverlapReport(has_conflicts=bool(conflicts), conflicts=conflicts)


EntryLike = Union[ShiftDateEntry, tuple]


def _date_key(value) -> str:
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return str(value)


def validate_shifts_by_date(entries: Iterable[EntryLike]) -> ShiftValidationResult:
    """Group (date, shift) entries by date and report overlaps inside each day."""
    by_date: dict[str, list[ShiftTime]] = {}
    for entry in entries:
        if isinstance(entry, ShiftDateEntry):
            day, shift = entry.date, entry.shift
        else:
            day, shift = entry
        by_date.setdefault(_date_key(day), []).append(shift)

    errors: list[ShiftDateError] = []
    for day, shifts in by_date.items():
        for conflict in find_overlap_conflicts(shifts).conflicts:
            errors.append(
                ShiftDateError(
                    date=day,
                    shift1_name=conflict.shift1.name or DEFAULT_SHIFT_NAME_1,
                    shift2_name=conflict.shift2.name or DEFAULT_SHIFT_NAME_2,
                    overlap_range=conflict.overlap_range,
                )
            )

    return ShiftValidationResult(is_valid=not errors, errors=errors)


def format_overlap_error(shift1_name: str, shift2_name: str, overlap_range: Optional[OverlapRange] = None) -> str:
    if overlap_range:
        return f'Ca "{shift1_name}" trùng giờ với "{shift2_name}" ({overlap_range.start} - {overlap_range.end})'
    return f'Ca "{shift1_name}" trùng giờ với "{shift2_name}"'
