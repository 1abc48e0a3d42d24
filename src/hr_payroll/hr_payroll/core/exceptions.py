from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind | None = None


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormatError(ValidationError):
    """Raised when a shift or attendance time cannot be parsed."""

    kind = ErrorKind.INVALID_TIME_FORMAT


class PayrollError(DomainError):
    """Raised when a payroll calculation for one employee cannot proceed."""


class ConfigMissingError(PayrollError):
    kind = ErrorKind.CONFIG_MISSING


class AlreadyFinalizedError(PayrollError):
    kind = ErrorKind.ALREADY_FINALIZED
