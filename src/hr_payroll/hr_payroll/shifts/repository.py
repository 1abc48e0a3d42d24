from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import ShiftTime


class ShiftRepository(Protocol):
    def list_for_branch(self, branch_id: str) -> Sequence[ShiftTime]:
        """Active shift catalog of a branch, ordered by start time."""
        raise NotImplementedError

    def get_by_ids(self, shift_ids: Iterable[str]) -> Sequence[ShiftTime]:
        raise NotImplementedError
