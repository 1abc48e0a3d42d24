from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Allowance, Holiday, MonthlyPayslip, SalaryConfig
from .repository import HolidayRepository, PayrollConfigRepository, PayslipRepository, SalaryConfigRepository


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


class MySQLSalaryConfigRepository(SalaryConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_salary_config(self, employee_id: str) -> Optional[SalaryConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, base_salary, standard_work_days, standard_hours_per_day,
                       ot_multiplier_weekday, ot_multiplier_weekend, ot_multiplier_holiday,
                       insurance_rate, dependents_count, kpi_target, has_insurance
                FROM salary_configs
                WHERE employee_id=%s AND is_active=1
                """,
                (str(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                "SELECT name, amount, per_work_day FROM salary_allowances WHERE employee_id=%s ORDER BY allowance_id",
                (str(employee_id),),
            )
            allowance_rows = fetchall(cur)

        return SalaryConfig(
            employee_id=str(row["employee_id"]),
            base_salary=float(row["base_salary"] or 0),
            standard_work_days_per_month=int(row["standard_work_days"]) if row.get("standard_work_days") else None,
            standard_hours_per_day=float(row.get("standard_hours_per_day") or 8),
            ot_multiplier_weekday=_opt_float(row.get("ot_multiplier_weekday")),
            ot_multiplier_weekend=_opt_float(row.get("ot_multiplier_weekend")),
            ot_multiplier_holiday=_opt_float(row.get("ot_multiplier_holiday")),
            insurance_rate=_opt_float(row.get("insurance_rate")),
            dependents_count=int(row.get("dependents_count") or 0),
            kpi_target=float(row.get("kpi_target") or 0),
            has_insurance=bool(row.get("has_insurance", 1)),
            allowances=tuple(
                Allowance(name=a["name"], amount=float(a["amount"] or 0), per_work_day=bool(a.get("per_work_day")))
                for a in allowance_rows
            ),
        )


class MySQLPayrollConfigRepository(PayrollConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_payroll_system_config(self) -> Optional[Mapping[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT config_key, config_value FROM payroll_system_configs")
            rows = fetchall(cur)
        if not rows:
            return None
        return {r["config_key"]: r["config_value"] for r in rows}


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_holidays(self, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_date, name, is_recurring
                FROM holidays
                WHERE is_recurring=1 OR holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date
                """,
                (start_date, end_date),
            )
            rows = fetchall(cur)
        return [
            Holiday(holiday_date=r["holiday_date"], name=r.get("name") or "", is_recurring=bool(r.get("is_recurring")))
            for r in rows
        ]


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_payslip(self, employee_id: str, month: str) -> Optional[MonthlyPayslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, month, standard_work_days, actual_work_days, paid_leave_days,
                       total_work_days, overtime_hours, base_salary, gross_salary,
                       insurance_deduction, pit_deduction, net_salary,
                       is_finalized, finalized_at, finalized_by
                FROM monthly_payslips
                WHERE employee_id=%s AND month=%s
                """,
                (str(employee_id), month),
            )
            row = fetchone(cur)
        if not row:
            return None
        return MonthlyPayslip(
            employee_id=str(row["employee_id"]),
            month=row["month"],
            standard_work_days=int(row["standard_work_days"] or 0),
            actual_work_days=int(row["actual_work_days"] or 0),
            paid_leave_days=int(row["paid_leave_days"] or 0),
            total_work_days=int(row["total_work_days"] or 0),
            overtime_hours=float(row["overtime_hours"] or 0),
            base_salary=float(row["base_salary"] or 0),
            gross_salary=int(row["gross_salary"] or 0),
            insurance_deduction=int(row["insurance_deduction"] or 0),
            pit_deduction=int(row["pit_deduction"] or 0),
            net_salary=int(row["net_salary"] or 0),
            is_finalized=bool(row["is_finalized"]),
            finalized_at=row.get("finalized_at"),
            finalized_by=row.get("finalized_by"),
        )

    def save_payslip(self, payslip: MonthlyPayslip) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT is_finalized FROM monthly_payslips WHERE employee_id=%s AND month=%s FOR UPDATE",
                (payslip.employee_id, payslip.month),
            )
            existing = fetchone(cur)
            if existing and existing["is_finalized"]:
                return False

            values = (
                payslip.standard_work_days,
                payslip.actual_work_days,
                payslip.paid_leave_days,
                payslip.total_work_days,
                payslip.overtime_hours,
                payslip.base_salary,
                payslip.gross_salary,
                payslip.insurance_deduction,
                payslip.pit_deduction,
                payslip.net_salary,
            )
            if existing:
                cur.execute(
                    """
                    UPDATE monthly_payslips
                    SET standard_work_days=%s, actual_work_days=%s, paid_leave_days=%s, total_work_days=%s,
                        overtime_hours=%s, base_salary=%s, gross_salary=%s,
                        insurance_deduction=%s, pit_deduction=%s, net_salary=%s
                    WHERE employee_id=%s AND month=%s AND is_finalized=0
                    """,
                    (*values, payslip.employee_id, payslip.month),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO monthly_payslips
                        (standard_work_days, actual_work_days, paid_leave_days, total_work_days,
                         overtime_hours, base_salary, gross_salary,
                         insurance_deduction, pit_deduction, net_salary, employee_id, month)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (*values, payslip.employee_id, payslip.month),
                )
        return True

    def finalize_payslip(self, employee_id: str, month: str, finalized_by: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE monthly_payslips
                SET is_finalized=1, finalized_at=NOW(), finalized_by=%s
                WHERE employee_id=%s AND month=%s AND is_finalized=0
                """,
                (finalized_by, str(employee_id), month),
            )
            return cur.rowcount == 1

    def unfinalize_payslip(self, employee_id: str, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE monthly_payslips
                SET is_finalized=0, finalized_at=NULL, finalized_by=NULL
                WHERE employee_id=%s AND month=%s AND is_finalized=1
                """,
                (str(employee_id), month),
            )
            return cur.rowcount == 1
