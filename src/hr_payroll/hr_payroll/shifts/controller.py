from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import fail, fail_from, ok
from ..core.exceptions import DomainError
from .model import ShiftDateEntry, ShiftTime
from .overlap import format_overlap_error, get_overlap_range, validate_shifts_by_date
from .service import ShiftRegistration


def register(app: Flask, container) -> None:
    @app.route("/api/shifts/overlap", methods=["POST"], endpoint="api_shifts_overlap")
    def api_shifts_overlap():
        data = request.get_json(silent=True) or {}
        if not isinstance(data.get("shift1"), dict) or not isinstance(data.get("shift2"), dict):
            return fail("Thiếu shift1 hoặc shift2")
        try:
            shift1 = ShiftTime.from_dict(data["shift1"])
            shift2 = ShiftTime.from_dict(data["shift2"])
        except DomainError as e:
            return fail_from(e)

        overlap = get_overlap_range(shift1, shift2)
        return ok({"overlaps": overlap is not None, "range": overlap.to_dict() if overlap else None})

    @app.route("/api/shifts/validate", methods=["POST"], endpoint="api_shifts_validate")
    def api_shifts_validate():
        data = request.get_json(silent=True) or {}
        items = data.get("entries")
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            return fail("entries phải là danh sách các ca")

        try:
            entries = [ShiftDateEntry(date=str(item.get("date") or ""), shift=ShiftTime.from_dict(item)) for item in items]
        except DomainError as e:
            return fail_from(e)

        result = validate_shifts_by_date(entries)
        return ok(
            {
                "is_valid": result.is_valid,
                "errors": [
                    {**err.to_dict(), "message": format_overlap_error(err.shift1_name, err.shift2_name, err.overlap_range)}
                    for err in result.errors
                ],
            }
        )

    @app.route("/api/shifts/registrations/validate", methods=["POST"], endpoint="api_shift_registrations_validate")
    def api_shift_registrations_validate():
        data = request.get_json(silent=True) or {}
        branch_id = str(data.get("branch_id") or "")
        items = data.get("registrations")
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            return fail("registrations phải là danh sách các đăng ký ca")

        try:
            registrations = [
                ShiftRegistration(
                    branch_id=branch_id,
                    shift_date=parse_iso_date(str(item.get("date") or "")),
                    shift_id=str(item.get("shift_id") or ""),
                )
                for item in items
            ]
            container.shift_registration_service.require_no_overlap(registrations)
        except DomainError as e:
            return fail_from(e)
        except ValueError:
            return fail("Ngày không hợp lệ (YYYY-MM-DD)")

        return ok({"is_valid": True})
