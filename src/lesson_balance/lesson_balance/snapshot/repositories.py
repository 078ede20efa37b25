from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceMark
from ..attendance.repository import AttendanceRepository
from ..balance.repository import RosterRepository
from ..core.enums import SubscriptionStatus
from ..lessons.model import Lesson
from ..lessons.repository import LessonRepository
from ..subscriptions.model import Subscription
from ..subscriptions.repository import SubscriptionRepository
from .store import Snapshot


class SnapshotLessonRepository(LessonRepository):
    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        return self._snapshot.lessons.get(lesson_id)

    def list_for_group(self, group_id: str) -> Sequence[Lesson]:
        return [l for l in self._snapshot.lessons.values() if l.group_id == group_id]

    def update_totals(self, *, lesson_id: str, total_amount: Decimal, uncovered_count: int) -> bool:
        lesson = self._snapshot.lessons.get(lesson_id)
        if not lesson:
            return False
        self._snapshot.lessons[lesson_id] = replace(lesson, total_amount=total_amount, uncovered_count=uncovered_count)
        return True


class SnapshotAttendanceRepository(AttendanceRepository):
    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    def list_for_student(self, student_id: str) -> Sequence[AttendanceMark]:
        return [m for m in self._snapshot.marks.values() if m.student_id == student_id]

    def list_for_lesson(self, lesson_id: str) -> Sequence[AttendanceMark]:
        return [m for m in self._snapshot.marks.values() if m.lesson_id == lesson_id]

    def update_charge(self, *, mark_id: str, payment_amount: Decimal, is_uncovered: bool) -> bool:
        mark = self._snapshot.marks.get(mark_id)
        if not mark:
            return False
        self._snapshot.marks[mark_id] = replace(mark, payment_amount=payment_amount, is_uncovered=is_uncovered)
        return True


class SnapshotSubscriptionRepository(SubscriptionRepository):
    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    def list_for_student(self, student_id: str) -> Sequence[Subscription]:
        return [s for s in self._snapshot.subscriptions.values() if s.student_id == student_id]

    def list_all(self) -> Sequence[Subscription]:
        return list(self._snapshot.subscriptions.values())

    def archive(self, *, subscription_id: str) -> bool:
        subscription = self._snapshot.subscriptions.get(subscription_id)
        if not subscription or subscription.is_archived:
            return False
        self._snapshot.subscriptions[subscription_id] = replace(subscription, status=SubscriptionStatus.ARCHIVED)
        return True


class SnapshotRosterRepository(RosterRepository):
    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    def student_exists(self, student_id: str) -> bool:
        return student_id in self._snapshot.student_ids

    def group_exists(self, group_id: str) -> bool:
        return group_id in self._snapshot.group_ids
