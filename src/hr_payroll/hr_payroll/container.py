from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .payroll.mysql_payroll_repository import (
    MySQLHolidayRepository,
    MySQLPayrollConfigRepository,
    MySQLPayslipRepository,
    MySQLSalaryConfigRepository,
)
from .payroll.service import PayrollService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftRegistrationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    shifts_repo: MySQLShiftRepository
    attendance_repo: MySQLAttendanceRepository
    leave_repo: MySQLLeaveRepository
    salary_config_repo: MySQLSalaryConfigRepository
    payroll_config_repo: MySQLPayrollConfigRepository
    holiday_repo: MySQLHolidayRepository
    payslip_repo: MySQLPayslipRepository

    shift_registration_service: ShiftRegistrationService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: dict,
    payroll_defaults: Optional[Mapping[str, Any]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    shifts_repo = MySQLShiftRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leave_repo = MySQLLeaveRepository(conn)
    salary_config_repo = MySQLSalaryConfigRepository(conn)
    payroll_config_repo = MySQLPayrollConfigRepository(conn)
    holiday_repo = MySQLHolidayRepository(conn)
    payslip_repo = MySQLPayslipRepository(conn)

    shift_registration_service = ShiftRegistrationService(shifts_repo)
    payroll_service = PayrollService(
        salary_configs=salary_config_repo,
        payroll_configs=payroll_config_repo,
        holidays=holiday_repo,
        payslips=payslip_repo,
        attendance=attendance_repo,
        leaves=leave_repo,
        shifts=shifts_repo,
        defaults=payroll_defaults,
    )

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        salary_config_repo=salary_config_repo,
        payroll_config_repo=payroll_config_repo,
        holiday_repo=holiday_repo,
        payslip_repo=payslip_repo,
        shift_registration_service=shift_registration_service,
        payroll_service=payroll_service,
    )
