from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from .model import AttendanceMark


class AttendanceRepository(Protocol):
    def list_for_student(self, student_id: str) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def list_for_lesson(self, lesson_id: str) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def update_charge(self, *, mark_id: str, payment_amount: Decimal, is_uncovered: bool) -> bool:
        """Store the revenue assigned to one attendance mark."""

        raise NotImplementedError
