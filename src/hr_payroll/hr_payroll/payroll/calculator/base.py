from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceAggregate
from ..calendar import WorkCalendar
from ..model import PayrollAdjustments, PayrollCalculation, PayrollSystemConfig, SalaryConfig


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
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
        raise NotImplementedError
