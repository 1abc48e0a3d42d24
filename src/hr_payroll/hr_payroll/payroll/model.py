from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceAggregate
from ..core.constants import (
    DEFAULT_DEPENDENT_DEDUCTION,
    DEFAULT_HOURS_PER_DAY,
    DEFAULT_INSURANCE_CAP_BASE,
    DEFAULT_INSURANCE_RATE,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_OT_HOLIDAY,
    DEFAULT_OT_WEEKDAY,
    DEFAULT_OT_WEEKEND,
    DEFAULT_PERSONAL_DEDUCTION,
    DEFAULT_TAX_BRACKETS,
    DEFAULT_WEEKEND_DAYS,
)
from ..core.enums import DayType, ErrorKind, PayslipState
from ..core.exceptions import ConfigMissingError


@dataclass(frozen=True)
class Allowance:
    """Phụ cấp. Per-day allowances (e.g. lunch) are paid per actual work day."""

    name: str
    amount: float
    per_work_day: bool = False


@dataclass(frozen=True)
class SalaryConfig:
    """Cấu hình lương của nhân viên (hoặc mặc định theo vai trò).

    ``None`` multipliers / insurance rate fall back to the system config;
    ``has_insurance=False`` (không đóng BHXH) skips the insurance deduction;
    ``standard_work_days_per_month=None`` derives the figure from the work calendar.
    """

    employee_id: str
    base_salary: float
    standard_work_days_per_month: Optional[int] = None
    standard_hours_per_day: float = DEFAULT_HOURS_PER_DAY
    ot_multiplier_weekday: Optional[float] = None
    ot_multiplier_weekend: Optional[float] = None
    ot_multiplier_holiday: Optional[float] = None
    insurance_rate: Optional[float] = None
    dependents_count: int = 0
    allowances: tuple[Allowance, ...] = ()
    kpi_target: float = 0.0
    has_insurance: bool = True


@dataclass(frozen=True)
class TaxBracket:
    up_to: Optional[float]
    rate: float


DEFAULT_BRACKETS = tuple(TaxBracket(up_to=float(u) if u is not None else None, rate=r) for u, r in DEFAULT_TAX_BRACKETS)


def _config_error(key: str, value: Any) -> ConfigMissingError:
    return ConfigMissingError(f"Cấu hình {key} không hợp lệ: {value!r}")


def _parse_brackets(value: Any) -> tuple[TaxBracket, ...]:
    if value is None or value == "":
        return DEFAULT_BRACKETS

    raw = value
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise _config_error("tax.brackets", value) from None
    if not isinstance(raw, (list, tuple)) or not raw:
        raise _config_error("tax.brackets", value)

    brackets: list[TaxBracket] = []
    try:
        for item in raw:
            if isinstance(item, Mapping):
                up_to, rate = item.get("up_to"), item["rate"]
            else:
                up_to, rate = item
            brackets.append(TaxBracket(up_to=float(up_to) if up_to is not None else None, rate=float(rate)))
    except (KeyError, TypeError, ValueError):
        raise _config_error("tax.brackets", value) from None

    if any(not 0 <= b.rate <= 1 for b in brackets) or any(
        b.up_to is not None and (math.isnan(b.up_to) or math.isinf(b.up_to)) for b in brackets
    ):
        raise _config_error("tax.brackets", value)

    # Unbounded bracket last
    brackets.sort(key=lambda b: (b.up_to is None, b.up_to or 0.0))
    return tuple(brackets)


def _parse_weekend(value: Any) -> tuple[int, ...]:
    if value is None or value == "":
        return DEFAULT_WEEKEND_DAYS
    items = value.split(",") if isinstance(value, str) else value
    try:
        days = tuple(sorted({int(str(d).strip()) for d in items if str(d).strip()}))
    except (TypeError, ValueError):
        raise _config_error("calendar.weekend_days", value) from None
    if any(d < 0 or d > 6 for d in days):
        raise _config_error("calendar.weekend_days", value)
    return days


@dataclass(frozen=True)
class PayrollSystemConfig:
    """Typed view over the global key-value payroll settings (tax.*, insurance.*, ot.*)."""

    personal_deduction: float = DEFAULT_PERSONAL_DEDUCTION
    dependent_deduction: float = DEFAULT_DEPENDENT_DEDUCTION
    tax_brackets: tuple[TaxBracket, ...] = DEFAULT_BRACKETS
    insurance_rate: float = DEFAULT_INSURANCE_RATE
    insurance_cap_base: float = DEFAULT_INSURANCE_CAP_BASE
    ot_weekday: float = DEFAULT_OT_WEEKDAY
    ot_weekend: float = DEFAULT_OT_WEEKEND
    ot_holiday: float = DEFAULT_OT_HOLIDAY
    weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "PayrollSystemConfig":
        if mapping is None:
            raise ConfigMissingError("Chưa có cấu hình lương hệ thống")

        def number(key: str, default: float) -> float:
            value = mapping.get(key)
            if value is None or value == "":
                return default
            try:
                result = float(value)
            except (TypeError, ValueError):
                raise _config_error(key, value) from None
            if math.isnan(result) or math.isinf(result) or result < 0:
                raise _config_error(key, value)
            return result

        return cls(
            personal_deduction=number("tax.personal_deduction", DEFAULT_PERSONAL_DEDUCTION),
            dependent_deduction=number("tax.dependent_deduction", DEFAULT_DEPENDENT_DEDUCTION),
            tax_brackets=_parse_brackets(mapping.get("tax.brackets")),
            insurance_rate=number("insurance.rate", DEFAULT_INSURANCE_RATE),
            insurance_cap_base=number("insurance.cap_base", DEFAULT_INSURANCE_CAP_BASE),
            ot_weekday=number("ot.weekday", DEFAULT_OT_WEEKDAY),
            ot_weekend=number("ot.weekend", DEFAULT_OT_WEEKEND),
            ot_holiday=number("ot.holiday", DEFAULT_OT_HOLIDAY),
            weekend_days=_parse_weekend(mapping.get("calendar.weekend_days")),
            late_grace_minutes=int(number("attendance.late_grace_minutes", DEFAULT_LATE_GRACE_MINUTES)),
        )


@dataclass(frozen=True)
class Holiday:
    holiday_date: date
    name: str = ""
    is_recurring: bool = False


@dataclass(frozen=True)
class PayrollAdjustments:
    """Manual per-run adjustments entered on the payroll screen.

    ``kpi_percent`` is the share of the employee's ``kpi_target`` paid this month.
    """

    bonus: float = 0.0
    penalty: float = 0.0
    kpi_percent: float = 100.0
    insurance_override: Optional[float] = None
    pit_override: Optional[float] = None


@dataclass(frozen=True)
class MonthlyPayslip:
    """Phiếu lương tháng. Immutable once ``is_finalized`` is set."""

    employee_id: str
    month: str
    standard_work_days: int
    actual_work_days: int
    paid_leave_days: int
    total_work_days: int
    overtime_hours: float
    base_salary: float
    gross_salary: int
    insurance_deduction: int
    pit_deduction: int
    net_salary: int
    is_finalized: bool = False
    finalized_at: Optional[datetime] = None
    finalized_by: Optional[str] = None

    @property
    def state(self) -> PayslipState:
        return PayslipState.FINALIZED if self.is_finalized else PayslipState.CALCULATED

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "month": self.month,
            "standard_work_days": self.standard_work_days,
            "actual_work_days": self.actual_work_days,
            "paid_leave_days": self.paid_leave_days,
            "total_work_days": self.total_work_days,
            "overtime_hours": self.overtime_hours,
            "base_salary": self.base_salary,
            "gross_salary": self.gross_salary,
            "insurance_deduction": self.insurance_deduction,
            "pit_deduction": self.pit_deduction,
            "net_salary": self.net_salary,
            "is_finalized": self.is_finalized,
            "finalized_at": self.finalized_at.isoformat() if self.finalized_at else None,
            "state": self.state.value,
        }


@dataclass(frozen=True)
class PayrollCalculation:
    """Full breakdown of one calculation run (unsaved until PayrollService.save)."""

    employee_id: str
    month: str
    aggregate: AttendanceAggregate
    base_salary: float
    prorated_base_salary: float
    hourly_rate: float
    overtime_pay_by_type: dict[DayType, float]
    overtime_pay: float
    allowances_total: float
    kpi_bonus: float
    bonus: float
    penalty: float
    gross_salary: int
    insurance_deduction: int
    taxable_income: float
    pit_deduction: int
    net_salary: int
    flags: tuple[ErrorKind, ...] = ()

    def to_payslip(self) -> MonthlyPayslip:
        return MonthlyPayslip(
            employee_id=self.employee_id,
            month=self.month,
            standard_work_days=self.aggregate.standard_work_days,
            actual_work_days=self.aggregate.actual_work_days,
            paid_leave_days=self.aggregate.paid_leave_days,
            total_work_days=self.aggregate.total_work_days,
            overtime_hours=round(self.aggregate.total_overtime_hours, 2),
            base_salary=self.base_salary,
            gross_salary=self.gross_salary,
            insurance_deduction=self.insurance_deduction,
            pit_deduction=self.pit_deduction,
            net_salary=self.net_salary,
        )

    @property
    def state(self) -> PayslipState:
        return PayslipState.DRAFT

    def to_dict(self, state: Optional[PayslipState] = None) -> dict:
        """``state`` is the stored state once saved; an unsaved run is a draft."""
        data = self.to_payslip().to_dict()
        data.update(
            {
                "state": (state or self.state).value,
                "prorated_base_salary": self.prorated_base_salary,
                "hourly_rate": self.hourly_rate,
                "overtime_pay": self.overtime_pay,
                "overtime_pay_by_type": {k.value: v for k, v in self.overtime_pay_by_type.items()},
                "allowances_total": self.allowances_total,
                "kpi_bonus": self.kpi_bonus,
                "bonus": self.bonus,
                "penalty": self.penalty,
                "taxable_income": self.taxable_income,
                "total_hours": self.aggregate.total_hours,
                "late_days": self.aggregate.late_days,
                "early_leave_days": self.aggregate.early_leave_days,
                "flags": [f.value for f in self.flags],
            }
        )
        return data


@dataclass(frozen=True)
class EmployeePayrollError:
    employee_id: str
    kind: Optional[ErrorKind]
    message: str

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "kind": self.kind.value if self.kind else None, "message": self.message}


@dataclass(frozen=True)
class PayrollBatchResult:
    month: str
    calculations: list[PayrollCalculation] = field(default_factory=list)
    errors: list[EmployeePayrollError] = field(default_factory=list)
