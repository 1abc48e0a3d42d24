from __future__ import annotations

import logging
import math
from typing import Optional

from ...attendance.model import AttendanceAggregate
from ...core.enums import DayType, ErrorKind
from ..calendar import WorkCalendar
from ..model import PayrollAdjustments, PayrollCalculation, PayrollSystemConfig, SalaryConfig
from ..tax import calculate_pit, round_vnd
from .base import PayrollCalculator

log = logging.getLogger(__name__)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule for monthly-salaried staff.

    gross = base * min(total_days, standard_days) / standard_days
            + OT pay + allowances + KPI bonus + bonus - penalty
    insurance = min(gross, cap_base) * insurance_rate  (0 when has_insurance is off)
    PIT = progressive brackets over gross - insurance - family deductions
    net = gross - insurance - PIT

    Days beyond the standard are not paid as base salary; extra time is paid
    only through overtime hours. Any amount that is negative, NaN or infinite
    is clamped to zero and flagged, never raised.
    """

    def calculate(
        self,
        *,
        month: str,
        salary: SalaryConfig,
        aggregate: AttendanceAggregate,
        system: PayrollSystemConfig,
        calendar: WorkCalendar,
        adjustments: Optional[PayrollAdjustments] = None,
    ) -> PayrollCalculation:
        adjustments = adjustments or PayrollAdjustments()
        flags: list[ErrorKind] = []

        def non_negative(value: float, label: str) -> float:
            try:
                value = float(value or 0)
            except (TypeError, ValueError):
                value = math.nan
            if math.isnan(value) or math.isinf(value) or value < 0:
                log.warning("Employee %s %s: %s=%s clamped to 0", salary.employee_id, month, label, value)
                if ErrorKind.NEGATIVE_OR_INVALID_QUANTITY not in flags:
                    flags.append(ErrorKind.NEGATIVE_OR_INVALID_QUANTITY)
                return 0.0
            return value

        def config_missing(reason: str) -> None:
            log.warning("Employee %s %s: %s", salary.employee_id, month, reason)
            if ErrorKind.CONFIG_MISSING not in flags:
                flags.append(ErrorKind.CONFIG_MISSING)

        base = non_negative(salary.base_salary, "base_salary")
        standard = int(aggregate.standard_work_days)
        hours_per_day = non_negative(salary.standard_hours_per_day, "standard_hours_per_day")

        prorated = 0.0
        hourly_rate = 0.0
        if standard > 0:
            paid_days = min(aggregate.total_work_days, standard)
            prorated = base * paid_days / standard
            if hours_per_day > 0:
                hourly_rate = base / standard / hours_per_day
            else:
                config_missing("standard_hours_per_day is 0, overtime not paid")
        else:
            config_missing("standard_work_days is 0, base salary not prorated")

        multipliers = {
            DayType.WEEKDAY: salary.ot_multiplier_weekday if salary.ot_multiplier_weekday is not None else system.ot_weekday,
            DayType.WEEKEND: salary.ot_multiplier_weekend if salary.ot_multiplier_weekend is not None else system.ot_weekend,
            DayType.HOLIDAY: salary.ot_multiplier_holiday if salary.ot_multiplier_holiday is not None else system.ot_holiday,
        }
        ot_hours_by_type = {t: 0.0 for t in DayType}
        for day, hours in aggregate.overtime_by_date.items():
            ot_hours_by_type[calendar.day_type(day)] += non_negative(hours, "overtime_hours")

        # OT hours not tied to a date are paid at the weekday rate
        undated = non_negative(aggregate.total_overtime_hours, "total_overtime_hours") - sum(ot_hours_by_type.values())
        if undated > 1e-9:
            ot_hours_by_type[DayType.WEEKDAY] += undated

        overtime_pay_by_type = {
            t: hours * hourly_rate * non_negative(multipliers[t], f"ot_multiplier_{t.value}")
            for t, hours in ot_hours_by_type.items()
        }
        overtime_pay = sum(overtime_pay_by_type.values())

        allowances_total = 0.0
        for allowance in salary.allowances:
            amount = non_negative(allowance.amount, f"allowance[{allowance.name}]")
            allowances_total += amount * aggregate.actual_work_days if allowance.per_work_day else amount

        kpi_bonus = (
            non_negative(salary.kpi_target, "kpi_target") * non_negative(adjustments.kpi_percent, "kpi_percent") / 100
        )
        bonus = non_negative(adjustments.bonus, "bonus")
        penalty = non_negative(adjustments.penalty, "penalty")

        gross = round_vnd(
            non_negative(prorated + overtime_pay + allowances_total + kpi_bonus + bonus - penalty, "gross_salary")
        )

        if adjustments.insurance_override is not None:
            insurance = non_negative(adjustments.insurance_override, "insurance_override")
        elif not salary.has_insurance:
            insurance = 0.0
        else:
            rate = salary.insurance_rate if salary.insurance_rate is not None else system.insurance_rate
            cap = non_negative(system.insurance_cap_base, "insurance_cap_base")
            insurance = min(gross, cap) * non_negative(rate, "insurance_rate")
        insurance_vnd = round_vnd(insurance)

        family_deduction = non_negative(system.personal_deduction, "personal_deduction") + non_negative(
            system.dependent_deduction, "dependent_deduction"
        ) * max(int(salary.dependents_count or 0), 0)
        taxable_income = max(gross - insurance - family_deduction, 0.0)

        if adjustments.pit_override is not None:
            pit = non_negative(adjustments.pit_override, "pit_override")
        else:
            pit = non_negative(calculate_pit(taxable_income, system.tax_brackets), "pit")
        pit_vnd = round_vnd(pit)

        # Net from the rounded payslip figures so gross - insurance - PIT always adds up;
        # may differ by 1 VND from rounding the unrounded difference.
        net = int(non_negative(gross - insurance_vnd - pit_vnd, "net_salary"))

        return PayrollCalculation(
            employee_id=salary.employee_id,
            month=month,
            aggregate=aggregate,
            base_salary=base,
            prorated_base_salary=prorated,
            hourly_rate=hourly_rate,
            overtime_pay_by_type=overtime_pay_by_type,
            overtime_pay=overtime_pay,
            allowances_total=allowances_total,
            kpi_bonus=kpi_bonus,
            bonus=bonus,
            penalty=penalty,
            gross_salary=gross,
            insurance_deduction=insurance_vnd,
            taxable_income=taxable_income,
            pit_deduction=pit_vnd,
            net_salary=net,
            flags=tuple(flags),
        )
