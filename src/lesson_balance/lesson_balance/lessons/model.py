from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal

from ..common.validators import require_non_empty, require_non_negative_int
from ..core.constants import ZERO_AMOUNT
from ..core.enums import LessonStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Lesson:
    """Domain entity: one scheduled lesson of a group."""

    lesson_id: str
    group_id: str
    date: date
    time: time
    status: LessonStatus
    total_amount: Decimal = ZERO_AMOUNT
    uncovered_count: int = 0

    def __post_init__(self) -> None:
        require_non_empty(self.lesson_id, "lesson_id")
        require_non_empty(self.group_id, "group_id")
        if not isinstance(self.date, date):
            raise ValidationError("Lesson date must be a date")
        if not isinstance(self.time, time):
            raise ValidationError("Lesson time must be a time")
        if not isinstance(self.status, LessonStatus):
            raise ValidationError(f"Unknown lesson status: {self.status!r}")
        require_non_negative_int(self.uncovered_count, "uncovered_count")

    @property
    def is_cancelled(self) -> bool:
        return self.status == LessonStatus.CANCELLED
