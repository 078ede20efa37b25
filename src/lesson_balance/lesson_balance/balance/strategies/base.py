from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ...attendance.model import AttendanceMark
from ...core.enums import AttendanceStatus, AuditOutcome, AuditReason
from ...lessons.model import Lesson
from ...subscriptions.model import Subscription
from ..model import AuditEntry, BalanceAuditResult


@dataclass(frozen=True)
class BalanceInputs:
    """Collections already narrowed to one (student, group) pair and sorted."""

    student_id: str
    group_id: str
    passes: tuple[Subscription, ...]
    lessons: tuple[Lesson, ...]
    marks_by_lesson: Mapping[str, AttendanceMark]
    today: date


class BalanceStrategy(ABC):
    """Strategy Pattern: encapsulate how lessons are charged for one student and group."""

    @abstractmethod
    def calculate(self, inputs: BalanceInputs) -> BalanceAuditResult:
        raise NotImplementedError


def make_entry(
    lesson: Lesson,
    attendance_status: Optional[AttendanceStatus],
    outcome: AuditOutcome,
    reason: AuditReason,
    covered_by_pass_id: Optional[str] = None,
) -> AuditEntry:
    return AuditEntry(
        lesson_id=lesson.lesson_id,
        lesson_date=lesson.date,
        lesson_time=lesson.time,
        attendance_status=attendance_status,
        outcome=outcome,
        reason=reason,
        covered_by_pass_id=covered_by_pass_id,
    )
