from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

import pytest

from src.lesson_balance.lesson_balance.attendance.model import AttendanceMark
from src.lesson_balance.lesson_balance.balance.service import BalanceService
from src.lesson_balance.lesson_balance.core.enums import AttendanceStatus, LessonStatus, SubscriptionStatus
from src.lesson_balance.lesson_balance.core.exceptions import NotFoundError, ValidationError
from src.lesson_balance.lesson_balance.lessons.model import Lesson
from src.lesson_balance.lesson_balance.subscriptions.model import Subscription


class InMemorySubscriptions:
    def __init__(self, items: list[Subscription]):
        self._items = {s.subscription_id: s for s in items}
        self.archived: list[str] = []

    def list_for_student(self, student_id: str):
        return [s for s in self._items.values() if s.student_id == student_id]

    def list_all(self):
        return list(self._items.values())

    def archive(self, *, subscription_id: str) -> bool:
        self._items[subscription_id] = replace(self._items[subscription_id], status=SubscriptionStatus.ARCHIVED)
        self.archived.append(subscription_id)
        return True


class InMemoryLessons:
    def __init__(self, items: list[Lesson]):
        self._items = {l.lesson_id: l for l in items}

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        return self._items.get(lesson_id)

    def list_for_group(self, group_id: str):
        return [l for l in self._items.values() if l.group_id == group_id]


class InMemoryAttendance:
    def __init__(self, items: list[AttendanceMark]):
        self._items = items

    def list_for_student(self, student_id: str):
        return [m for m in self._items if m.student_id == student_id]


class InMemoryRoster:
    def __init__(self, students: set[str], groups: set[str]):
        self._students = students
        self._groups = groups

    def student_exists(self, student_id: str) -> bool:
        return student_id in self._students

    def group_exists(self, group_id: str) -> bool:
        return group_id in self._groups


def build_service(subscriptions=None) -> BalanceService:
    subscriptions = subscriptions or InMemorySubscriptions(
        [Subscription(subscription_id="p1", student_id="s1", group_id="g1", lessons_total=4, purchase_date=date(2024, 1, 1))]
    )
    lessons = InMemoryLessons(
        [
            Lesson(lesson_id="l1", group_id="g1", date=date(2024, 1, 10), time=time(18, 0), status=LessonStatus.COMPLETED),
            Lesson(lesson_id="l2", group_id="g2", date=date(2024, 1, 11), time=time(18, 0), status=LessonStatus.COMPLETED),
        ]
    )
    attendance = InMemoryAttendance(
        [
            AttendanceMark(mark_id="m1", lesson_id="l1", student_id="s1", status=AttendanceStatus.PRESENT),
            AttendanceMark(mark_id="m2", lesson_id="l2", student_id="s1", status=AttendanceStatus.PRESENT),
        ]
    )
    roster = InMemoryRoster({"s1"}, {"g1", "g2"})
    return BalanceService(subscriptions, lessons, attendance, roster)


def test_group_audit_uses_repository_data():
    svc = build_service()

    result = svc.get_group_audit(student_id="s1", group_id="g1", today=date(2024, 3, 1))

    assert result.balance == 3
    assert [e.lesson_id for e in result.audit_entries] == ["l1"]


def test_group_balance_has_no_audit_trail():
    svc = build_service()

    balance = svc.get_group_balance(student_id="s1", group_id="g2", today=date(2024, 3, 1))

    assert balance.balance == -1
    assert [u.lesson_id for u in balance.uncovered_lessons] == ["l2"]


def test_student_summary_spans_groups_from_passes_and_marks():
    svc = build_service()

    summary = svc.get_student_summary(student_id="s1", today=date(2024, 3, 1))

    assert summary.surplus == 3
    assert summary.debt == 1


def test_unknown_student_is_not_found():
    with pytest.raises(NotFoundError):
        build_service().get_group_audit(student_id="nobody", group_id="g1", today=date(2024, 3, 1))


def test_unknown_group_is_not_found():
    with pytest.raises(NotFoundError):
        build_service().get_group_audit(student_id="s1", group_id="g9", today=date(2024, 3, 1))


def test_blank_ids_are_rejected():
    with pytest.raises(ValidationError):
        build_service().get_group_audit(student_id="  ", group_id="g1", today=date(2024, 3, 1))


def test_today_defaults_to_configured_clock(monkeypatch):
    import src.lesson_balance.lesson_balance.balance.service as service_module

    monkeypatch.setattr(service_module, "today_local", lambda tz: date(2024, 1, 5))
    svc = build_service()

    # l1 (2024-01-10) is still in the future for the patched clock but is marked present
    result = svc.get_group_audit(student_id="s1", group_id="g1")

    assert result.lessons_covered == 1


def test_archive_expired_archives_only_lapsed_active_passes():
    subscriptions = InMemorySubscriptions(
        [
            Subscription(subscription_id="lapsed", student_id="s1", group_id="g1", lessons_total=4, purchase_date=date(2024, 1, 1), expiry_date=date(2024, 1, 31)),
            Subscription(subscription_id="current", student_id="s1", group_id="g1", lessons_total=4, purchase_date=date(2024, 2, 1), expiry_date=date(2024, 3, 31)),
        ]
    )
    svc = build_service(subscriptions)

    archived = svc.archive_expired(today=date(2024, 2, 15))

    assert archived == ["lapsed"]
    assert subscriptions.archived == ["lapsed"]
    assert svc.archive_expired(today=date(2024, 2, 15)) == []
