from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_month
from ..core.exceptions import AlreadyFinalizedError, ConfigMissingError, DomainError, ValidationError
from ..leave.repository import LeaveRepository
from ..shifts.repository import ShiftRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .calendar import WorkCalendar
from .model import (
    EmployeePayrollError,
    MonthlyPayslip,
    PayrollAdjustments,
    PayrollBatchResult,
    PayrollCalculation,
    PayrollSystemConfig,
)
from .repository import HolidayRepository, PayrollConfigRepository, PayslipRepository, SalaryConfigRepository

log = logging.getLogger(__name__)


class PayrollService:
    """Tính lương tháng và quản lý vòng đời phiếu lương.

    States: draft (no row) -> calculated (saved) -> finalized. A finalized
    payslip is never recalculated or overwritten until ``unlock`` resets it.
    """

    def __init__(
        self,
        *,
        salary_configs: SalaryConfigRepository,
        payroll_configs: PayrollConfigRepository,
        holidays: HolidayRepository,
        payslips: PayslipRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        shifts: Optional[ShiftRepository] = None,
        calculator: Optional[PayrollCalculator] = None,
        aggregator: Optional[AttendanceAggregator] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        self._salary_configs = salary_configs
        self._payroll_configs = payroll_configs
        self._holidays = holidays
        self._payslips = payslips
        self._attendance = attendance
        self._leaves = leaves
        self._shifts = shifts
        self._calculator = calculator or StandardPayrollCalculator()
        self._aggregator = aggregator
        self._defaults = dict(defaults or {})

    def load_system_config(self) -> PayrollSystemConfig:
        stored = self._payroll_configs.get_payroll_system_config()
        if stored is None:
            raise ConfigMissingError("Chưa có cấu hình lương hệ thống")
        return PayrollSystemConfig.from_mapping({**self._defaults, **stored})

    def get_payslip(self, employee_id: str, month: str) -> Optional[MonthlyPayslip]:
        require_month(month)
        return self._payslips.get_payslip(str(employee_id), month)

    def _shifts_by_date(self, records) -> dict:
        if self._shifts is None:
            return {}
        shift_ids = {r.shift_id for r in records if r.shift_id}
        if not shift_ids:
            return {}
        by_id = {s.id: s for s in self._shifts.get_by_ids(shift_ids)}
        return {
            r.effective_date: by_id[r.shift_id]
            for r in records
            if r.shift_id in by_id and r.effective_date is not None
        }

    def calculate(
        self,
        employee_id: str,
        month: str,
        adjustments: Optional[PayrollAdjustments] = None,
    ) -> PayrollCalculation:
        require_month(month)
        employee_id = str(employee_id)

        existing = self._payslips.get_payslip(employee_id, month)
        if existing is not None and existing.is_finalized:
            raise AlreadyFinalizedError(f"Bảng lương tháng {month} của nhân viên {employee_id} đã chốt")

        salary = self._salary_configs.get_salary_config(employee_id)
        if salary is None:
            raise ConfigMissingError(f"Nhân viên {employee_id} chưa có cấu hình lương")
        system = self.load_system_config()

        first, last = month_bounds(month)
        calendar = WorkCalendar(self._holidays.list_holidays(first, last), weekend_days=system.weekend_days)
        standard = (
            salary.standard_work_days_per_month
            if salary.standard_work_days_per_month is not None
            else calendar.standard_work_days(month)
        )

        records = self._attendance.get_attendance_records(employee_id, first, last)
        leave_requests = self._leaves.get_leave_requests(employee_id, first, last)
        aggregator = self._aggregator or AttendanceAggregator(grace_minutes=system.late_grace_minutes)
        aggregate = aggregator.aggregate(
            records,
            leave_requests,
            month,
            standard_work_days=standard,
            shifts_by_date=self._shifts_by_date(records),
        )

        calculation = self._calculator.calculate(
            month=month,
            salary=salary,
            aggregate=aggregate,
            system=system,
            calendar=calendar,
            adjustments=adjustments,
        )
        log.info(
            "Payroll %s %s: gross=%s net=%s flags=%s",
            employee_id,
            month,
            calculation.gross_salary,
            calculation.net_salary,
            [f.value for f in calculation.flags],
        )
        return calculation

    def save(self, calculation: PayrollCalculation) -> MonthlyPayslip:
        payslip = calculation.to_payslip()
        if not self._payslips.save_payslip(payslip):
            raise AlreadyFinalizedError(
                f"Bảng lương tháng {payslip.month} của nhân viên {payslip.employee_id} đã chốt, không thể ghi đè"
            )
        return payslip

    def finalize(self, employee_id: str, month: str, finalized_by: Optional[str] = None) -> MonthlyPayslip:
        require_month(month)
        employee_id = str(employee_id)

        payslip = self._payslips.get_payslip(employee_id, month)
        if payslip is None:
            raise ValidationError(f"Chưa có phiếu lương tháng {month} của nhân viên {employee_id}")
        if payslip.is_finalized:
            raise AlreadyFinalizedError(f"Bảng lương tháng {month} của nhân viên {employee_id} đã chốt")

        # The store's conditional update decides concurrent finalize races
        if not self._payslips.finalize_payslip(employee_id, month, finalized_by):
            raise AlreadyFinalizedError(f"Bảng lương tháng {month} của nhân viên {employee_id} đã chốt")

        log.info("Payroll %s %s finalized by %s", employee_id, month, finalized_by or "-")
        return self._payslips.get_payslip(employee_id, month) or payslip

    def unlock(self, employee_id: str, month: str) -> MonthlyPayslip:
        require_month(month)
        employee_id = str(employee_id)

        payslip = self._payslips.get_payslip(employee_id, month)
        if payslip is None:
            raise ValidationError(f"Chưa có phiếu lương tháng {month} của nhân viên {employee_id}")
        if payslip.is_finalized:
            self._payslips.unfinalize_payslip(employee_id, month)
            log.info("Payroll %s %s unlocked", employee_id, month)
        return self._payslips.get_payslip(employee_id, month) or payslip

    def _run_one(
        self,
        employee_id: str,
        month: str,
        adjustments: Optional[PayrollAdjustments],
        save: bool,
    ) -> Union[PayrollCalculation, EmployeePayrollError]:
        try:
            calculation = self.calculate(employee_id, month, adjustments)
            if save:
                self.save(calculation)
            return calculation
        except DomainError as e:
            log.warning("Payroll %s %s skipped: %s", employee_id, month, e)
            return EmployeePayrollError(employee_id=str(employee_id), kind=e.kind, message=str(e))

    def run_batch(
        self,
        employee_ids: Iterable[str],
        month: str,
        *,
        adjustments: Optional[Mapping[str, PayrollAdjustments]] = None,
        save: bool = False,
    ) -> PayrollBatchResult:
        """Calculate every employee independently; one failure never stops the others."""
        require_month(month)
        employee_ids = [str(e) for e in employee_ids]
        adjustments = adjustments or {}

        result = PayrollBatchResult(month=month)
        for emp_id in employee_ids:
            outcome = self._run_one(emp_id, month, adjustments.get(emp_id), save)
            if isinstance(outcome, EmployeePayrollError):
                result.errors.append(outcome)
            else:
                result.calculations.append(outcome)

        log.info(
            "Payroll batch %s: %d calculated, %d failed",
            month,
            len(result.calculations),
            len(result.errors),
        )
        return result
