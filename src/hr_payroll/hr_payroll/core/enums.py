from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Trạng thái chấm công lưu trong CSDL."""

    PENDING = "pending"
    APPROVED = "approved"
    ON_TIME = "ontime"
    LATE = "late"
    EARLY_LEAVE = "early_leave"
    ABSENT = "absent"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    """Trạng thái duyệt đơn nghỉ phép."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DayType(str, Enum):
    """Phân loại ngày dùng để chọn hệ số tăng ca."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class PayslipState(str, Enum):
    DRAFT = "draft"
    CALCULATED = "calculated"
    FINALIZED = "finalized"


class ErrorKind(str, Enum):
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    CONFIG_MISSING = "CONFIG_MISSING"
    ALREADY_FINALIZED = "ALREADY_FINALIZED"
    NEGATIVE_OR_INVALID_QUANTITY = "NEGATIVE_OR_INVALID_QUANTITY"
