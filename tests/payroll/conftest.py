from __future__ import annotations

import pytest

from src.hr_payroll.hr_payroll.payroll.model import SalaryConfig
from tests.payroll.payroll_fakes import (
    FakeAttendanceRepo,
    FakeHolidayRepo,
    FakeLeaveRepo,
    FakePayrollConfigRepo,
    FakePayslipRepo,
    FakeSalaryConfigRepo,
    PayrollEnv,
    full_month_records,
)


@pytest.fixture
def payroll_env() -> PayrollEnv:
    month = "2025-03"
    return PayrollEnv(
        salaries=FakeSalaryConfigRepo(
            [
                SalaryConfig(employee_id="e1", base_salary=26_000_000),
                SalaryConfig(employee_id="e3", base_salary=13_000_000),
            ]
        ),
        system=FakePayrollConfigRepo({}),
        holidays=FakeHolidayRepo(),
        payslips=FakePayslipRepo(),
        attendance=FakeAttendanceRepo(
            {
                "e1": full_month_records("e1", month),
                "e2": full_month_records("e2", month),
                "e3": full_month_records("e3", month),
            }
        ),
        leaves=FakeLeaveRepo(),
    )
