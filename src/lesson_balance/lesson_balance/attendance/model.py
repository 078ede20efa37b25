from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceMark:
    """Domain entity: attendance of one student at one lesson.

    A missing mark means "no data", never "absent".
    """

    mark_id: str
    lesson_id: str
    student_id: str
    status: AttendanceStatus
    payment_amount: Optional[Decimal] = None
    is_uncovered: bool = False

    def __post_init__(self) -> None:
        require_non_empty(self.mark_id, "mark_id")
        require_non_empty(self.lesson_id, "lesson_id")
        require_non_empty(self.student_id, "student_id")
        if not isinstance(self.status, AttendanceStatus):
            raise ValidationError(f"Unknown attendance status: {self.status!r}")
        if self.payment_amount is not None and self.payment_amount < 0:
            raise ValidationError("payment_amount must not be negative")
