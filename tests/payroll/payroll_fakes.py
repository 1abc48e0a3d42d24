from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.common.datetime_utils import iter_dates, month_bounds
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus
from src.hr_payroll.hr_payroll.payroll.service import PayrollService


def full_month_records(employee_id: str, month: str, *, hours: float = 8) -> list[AttendanceRecord]:
    """One approved record per Monday-Saturday of the month."""
    first, last = month_bounds(month)
    return [
        AttendanceRecord(employee_id=employee_id, work_date=d, hours_worked=hours, status=AttendanceStatus.APPROVED)
        for d in iter_dates(first, last)
        if d.weekday() != 6
    ]


class FakeSalaryConfigRepo:
    def __init__(self, configs):
        self._configs = {c.employee_id: c for c in configs}

    def get_salary_config(self, employee_id):
        return self._configs.get(str(employee_id))


class FakePayrollConfigRepo:
    def __init__(self, mapping):
        self.mapping = mapping

    def get_payroll_system_config(self):
        return self.mapping


class FakeHolidayRepo:
    def __init__(self, holidays=()):
        self._holidays = list(holidays)

    def list_holidays(self, start_date, end_date):
        return [h for h in self._holidays if h.is_recurring or start_date <= h.holiday_date <= end_date]


class FakePayslipRepo:
    def __init__(self):
        self.rows = {}

    def get_payslip(self, employee_id, month):
        return self.rows.get((employee_id, month))

    def save_payslip(self, payslip):
        current = self.rows.get((payslip.employee_id, payslip.month))
        if current is not None and current.is_finalized:
            return False
        self.rows[(payslip.employee_id, payslip.month)] = payslip
        return True

    def finalize_payslip(self, employee_id, month, finalized_by=None):
        current = self.rows.get((employee_id, month))
        if current is None or current.is_finalized:
            return False
        self.rows[(employee_id, month)] = replace(
            current, is_finalized=True, finalized_at=datetime(2025, 4, 1, 9, 0), finalized_by=finalized_by
        )
        return True

    def unfinalize_payslip(self, employee_id, month):
        current = self.rows.get((employee_id, month))
        if current is None or not current.is_finalized:
            return False
        self.rows[(employee_id, month)] = replace(current, is_finalized=False, finalized_at=None, finalized_by=None)
        return True


class FakeAttendanceRepo:
    def __init__(self, records_by_employee):
        self._records = records_by_employee

    def get_attendance_records(self, employee_id, start_date, end_date):
        return [
            r
            for r in self._records.get(employee_id, [])
            if r.effective_date is not None and start_date <= r.effective_date <= end_date
        ]


class FakeLeaveRepo:
    def __init__(self, requests_by_employee=None):
        self._requests = requests_by_employee or {}

    def get_leave_requests(self, employee_id, start_date, end_date, status=None):
        return [r for r in self._requests.get(employee_id, []) if r.start_date <= end_date and r.end_date >= start_date]


@dataclass
class PayrollEnv:
    salaries: FakeSalaryConfigRepo
    system: FakePayrollConfigRepo
    holidays: FakeHolidayRepo
    payslips: FakePayslipRepo
    attendance: FakeAttendanceRepo
    leaves: FakeLeaveRepo
    defaults: dict = field(default_factory=dict)

    def service(self, **kwargs) -> PayrollService:
        return PayrollService(
            salary_configs=self.salaries,
            payroll_configs=self.system,
            holidays=self.holidays,
            payslips=self.payslips,
            attendance=self.attendance,
            leaves=self.leaves,
            defaults=self.defaults,
            **kwargs,
        )
