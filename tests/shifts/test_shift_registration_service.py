from __future__ import annotations

from datetime import date

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.shifts.model import ShiftTime
from src.hr_payroll.hr_payroll.shifts.service import ShiftRegistration, ShiftRegistrationService


class FakeShiftRepo:
    def __init__(self, shifts):
        self._shifts = {s.id: s for s in shifts}

    def list_for_branch(self, branch_id):
        return sorted(self._shifts.values(), key=lambda s: s.start_minutes)

    def get_by_ids(self, shift_ids):
        return [self._shifts[i] for i in dict.fromkeys(str(x) for x in shift_ids) if i in self._shifts]


@pytest.fixture
def service():
    return ShiftRegistrationService(
        FakeShiftRepo(
            [
                ShiftTime("08:00", "12:00", name="Ca sáng", id="1"),
                ShiftTime("11:00", "15:00", name="Ca trưa", id="2"),
                ShiftTime("13:00", "17:00", name="Ca chiều", id="3"),
                ShiftTime("22:00", "06:00", name="Ca đêm", id="4"),
            ]
        )
    )


def test_registrations_on_different_days_are_valid(service):
    regs = [
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 3), shift_id="1"),
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 4), shift_id="2"),
    ]

    assert service.validate_registrations(regs).is_valid is True


def test_overlapping_registrations_raise_with_date(service):
    regs = [
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 3), shift_id="1"),
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 3), shift_id="2"),
    ]

    with pytest.raises(ValidationError) as exc:
        service.require_no_overlap(regs)

    assert str(exc.value) == 'Ca "Ca sáng" trùng giờ với "Ca trưa" (11:00 - 12:00) trong ngày 2025-03-03'


def test_unknown_shift_ids_are_skipped(service):
    regs = [
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 3), shift_id="1"),
        ShiftRegistration(branch_id="b1", shift_date=date(2025, 3, 3), shift_id="99"),
    ]

    service.require_no_overlap(regs)


def test_check_against_catalog_excludes_candidate_itself(service):
    candidate = ShiftTime("11:00", "15:00", name="Ca trưa", id="2")

    assert service.check_against_catalog("b1", date(2025, 3, 3), candidate) == ["1", "3"]


def test_available_shifts_for_week(service):
    week = service.available_shifts_for_week("b1", date(2025, 3, 3))

    assert [d for d, _ in week] == [date(2025, 3, d) for d in range(3, 10)]
    assert [s.id for s in week[0][1]] == ["1", "2", "3", "4"]


def test_available_shifts_for_week_empty_catalog():
    assert ShiftRegistrationService(FakeShiftRepo([])).available_shifts_for_week("b1", date(2025, 3, 3)) == []
