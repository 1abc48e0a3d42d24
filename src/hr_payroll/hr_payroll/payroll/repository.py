from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Holiday, MonthlyPayslip, SalaryConfig


class SalaryConfigRepository(Protocol):
    def get_salary_config(self, employee_id: str) -> Optional[SalaryConfig]:
        raise NotImplementedError


class PayrollConfigRepository(Protocol):
    def get_payroll_system_config(self) -> Optional[Mapping[str, Any]]:
        """Raw key-value settings (``tax.*``, ``insurance.*``, ``ot.*``); None if never configured."""
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_holidays(self, start_date: date, end_date: date) -> Sequence[Holiday]:
        """Fixed holidays inside the range plus every recurring holiday."""
        raise NotImplementedError


class PayslipRepository(Protocol):
    def get_payslip(self, employee_id: str, month: str) -> Optional[MonthlyPayslip]:
        raise NotImplementedError

    def save_payslip(self, payslip: MonthlyPayslip) -> bool:
        """Insert or replace a draft payslip. Returns False if the stored row is finalized."""
        raise NotImplementedError

    def finalize_payslip(self, employee_id: str, month: str, finalized_by: Optional[str] = None) -> bool:
        """Conditional update; True only for the call that flipped the flag."""
        raise NotImplementedError

    def unfinalize_payslip(self, employee_id: str, month: str) -> bool:
        raise NotImplementedError
