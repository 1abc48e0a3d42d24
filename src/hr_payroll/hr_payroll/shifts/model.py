from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_time_to_minutes
from ..common.validators import require_time_format


@dataclass(frozen=True)
class ShiftTime:
    """Thực thể miền (domain): Khung giờ ca làm việc trong một ngày.

    Times are wall-clock ``HH:MM[:SS]``; an overnight shift has end < start.
    """

    start_time: str
    end_time: str
    name: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        require_time_format(self.start_time, "Giờ bắt đầu ca")
        require_time_format(self.end_time, "Giờ kết thúc ca")

    @property
    def start_minutes(self) -> int:
        return parse_time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time_to_minutes(self.end_time)

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes < self.start_minutes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShiftTime":
        shift_id = data.get("id")
        return cls(
            start_time=str(data.get("start_time") or ""),
            end_time=str(data.get("end_time") or ""),
            name=data.get("name"),
            id=str(shift_id) if shift_id is not None else None,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "start_time": self.start_time, "end_time": self.end_time}


@dataclass(frozen=True)
class OverlapRange:
    start: str
    end: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class OverlapConflict:
    shift1: ShiftTime
    shift2: ShiftTime
    overlap_range: OverlapRange


@dataclass(frozen=True)
class OverlapReport:
    has_conflicts: bool
    conflicts: list[OverlapConflict] = field(default_factory=list)


@dataclass(frozen=True)
class ShiftDateEntry:
    date: str
    shift: ShiftTime


@dataclass(frozen=True)
class ShiftDateError:
    date: str
    shift1_name: str
    shift2_name: str
    overlap_range: OverlapRange

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "shift1_name": self.shift1_name,
            "shift2_name": self.shift2_name,
            "overlap_range": self.overlap_range.to_dict(),
        }


@dataclass(frozen=True)
class ShiftValidationResult:
    is_valid: bool
    errors: list[ShiftDateError] = field(default_factory=list)
