from __future__ import annotations

from typing import Protocol


class RosterRepository(Protocol):
    """Existence checks for the students and groups a balance is asked for."""

    def student_exists(self, student_id: str) -> bool:
        raise NotImplementedError

    def group_exists(self, group_id: str) -> bool:
        raise NotImplementedError
