from __future__ import annotations

from flask import jsonify

from ..core.exceptions import AlreadyFinalizedError, ConfigMissingError, DomainError


def ok(data=None, status=200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def fail(message="Bad Request", status=400, code=None, detail=None, errors=None):
    err = {"message": message}
    if code:
        err["code"] = code
    if detail:
        err["detail"] = detail
    if errors:
        err["errors"] = errors
    return jsonify({"success": False, "error": err}), status


def fail_from(e: DomainError):
    """Map a domain exception to its HTTP status and ErrorKind code."""
    if isinstance(e, AlreadyFinalizedError):
        status = 409
    elif isinstance(e, ConfigMissingError):
        status = 404
    else:
        status = 400
    code = e.kind.value if e.kind else "VALIDATION_ERROR"
    return fail(str(e), status=status, code=code)
