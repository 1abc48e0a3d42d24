from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..core.exceptions import ValidationError
from .model import ShiftDateEntry, ShiftTime, ShiftValidationResult
from .overlap import format_overlap_error, get_overlapping_shift_ids, validate_shifts_by_date
from .repository import ShiftRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftRegistration:
    """Một dòng đăng ký ca: nhân viên chọn ca `shift_id` cho ngày `shift_date`."""

    branch_id: str
    shift_date: date
    shift_id: str


class ShiftRegistrationService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def get_shifts_for_date(self, branch_id: str, work_date: date) -> Sequence[ShiftTime]:
        """The branch catalog offered on a given date (same catalog every day)."""
        return self._shifts.list_for_branch(str(branch_id))

    def available_shifts_for_week(self, branch_id: str, week_start: date) -> list[tuple[date, Sequence[ShiftTime]]]:
        catalog = self._shifts.list_for_branch(str(branch_id))
        if not catalog:
            return []
        return [(week_start + timedelta(days=i), catalog) for i in range(7)]

    def check_against_catalog(self, branch_id: str, work_date: date, candidate: ShiftTime) -> list[str]:
        others = [s for s in self.get_shifts_for_date(branch_id, work_date) if s.id != candidate.id]
        return get_overlapping_shift_ids(candidate, others)

    def validate_entries(self, entries: Iterable[ShiftDateEntry]) -> ShiftValidationResult:
        result = validate_shifts_by_date(entries)
        for err in result.errors:
            log.info(
                "Shift overlap on %s: %s / %s (%s-%s)",
                err.date,
                err.shift1_name,
                err.shift2_name,
                err.overlap_range.start,
                err.overlap_range.end,
            )
        return result

    def validate_registrations(self, registrations: Sequence[ShiftRegistration]) -> ShiftValidationResult:
        """Resolve registered shift ids against the catalog and check each day."""
        shifts_by_id = {s.id: s for s in self._shifts.get_by_ids(r.shift_id for r in registrations)}

        entries: list[ShiftDateEntry] = []
        for reg in registrations:
            shift = shifts_by_id.get(str(reg.shift_id))
            if not shift:
                log.warning("Unknown shift %s in registration for %s", reg.shift_id, reg.shift_date)
                continue
            entries.append(ShiftDateEntry(date=reg.shift_date.strftime("%Y-%m-%d"), shift=shift))

        return self.validate_entries(entries)

    def require_no_overlap(self, registrations: Sequence[ShiftRegistration]) -> None:
        result = self.validate_registrations(registrations)
        if not result.is_valid:
            err = result.errors[0]
            msg = format_overlap_error(err.shift1_name, err.shift2_name, err.overlap_range)
            raise ValidationError(f"{msg} trong ngày {err.date}")
