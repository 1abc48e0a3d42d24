from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from flask import Flask, request

from ..common.http import fail, fail_from, ok
from ..core.enums import PayslipState
from ..core.exceptions import DomainError, ValidationError
from .model import PayrollAdjustments


def _amount(data: Mapping[str, Any], key: str, default: Optional[float]) -> Optional[float]:
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} phải là số") from None
    if math.isnan(amount) or math.isinf(amount):
        raise ValidationError(f"{key} phải là số hữu hạn")
    return amount


def _adjustments(data: Mapping[str, Any]) -> PayrollAdjustments:
    return PayrollAdjustments(
        bonus=_amount(data, "bonus", 0.0),
        penalty=_amount(data, "penalty", 0.0),
        kpi_percent=_amount(data, "kpi_percent", 100.0),
        insurance_override=_amount(data, "insurance_override", None),
        pit_override=_amount(data, "pit_override", None),
    )


def register(app: Flask, container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/<employee_id>/<month>", methods=["GET"], endpoint="api_payroll_get")
    def api_payroll_get(employee_id: str, month: str):
        try:
            payslip = service.get_payslip(employee_id, month)
        except DomainError as e:
            return fail_from(e)
        if payslip is None:
            return fail("Chưa có phiếu lương", status=404, code="NOT_FOUND")
        return ok(payslip.to_dict())

    @app.route("/api/payroll/<employee_id>/<month>/calculate", methods=["POST"], endpoint="api_payroll_calculate")
    def api_payroll_calculate(employee_id: str, month: str):
        data = request.get_json(silent=True) or {}
        try:
            calculation = service.calculate(employee_id, month, _adjustments(data))
            state = service.save(calculation).state if data.get("save") else None
        except DomainError as e:
            return fail_from(e)
        return ok(calculation.to_dict(state))

    @app.route("/api/payroll/batch", methods=["POST"], endpoint="api_payroll_batch")
    def api_payroll_batch():
        data = request.get_json(silent=True) or {}
        employee_ids = data.get("employee_ids")
        if not isinstance(employee_ids, list) or not employee_ids:
            return fail("employee_ids phải là danh sách không rỗng")

        save = bool(data.get("save"))
        try:
            result = service.run_batch(employee_ids, str(data.get("month") or ""), save=save)
        except DomainError as e:
            return fail_from(e)

        return ok(
            {
                "month": result.month,
                "calculations": [c.to_dict(PayslipState.CALCULATED if save else None) for c in result.calculations],
                "errors": [e.to_dict() for e in result.errors],
            },
            calculated=len(result.calculations),
            failed=len(result.errors),
        )

    @app.route("/api/payroll/<employee_id>/<month>/finalize", methods=["POST"], endpoint="api_payroll_finalize")
    def api_payroll_finalize(employee_id: str, month: str):
        data = request.get_json(silent=True) or {}
        try:
            payslip = service.finalize(employee_id, month, finalized_by=data.get("finalized_by"))
        except DomainError as e:
            return fail_from(e)
        return ok(payslip.to_dict())

    @app.route("/api/payroll/<employee_id>/<month>/unlock", methods=["POST"], endpoint="api_payroll_unlock")
    def api_payroll_unlock(employee_id: str, month: str):
        try:
            payslip = service.unlock(employee_id, month)
        except DomainError as e:
            return fail_from(e)
        return ok(payslip.to_dict())
