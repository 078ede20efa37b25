from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from decimal import Decimal
from typing import Optional

from src.lesson_balance.lesson_balance.attendance.model import AttendanceMark
from src.lesson_balance.lesson_balance.balance.service import BalanceService
from src.lesson_balance.lesson_balance.core.enums import AttendanceStatus, LessonStatus
from src.lesson_balance.lesson_balance.lessons.model import Lesson
from src.lesson_balance.lesson_balance.revenue.service import RevenueService
from src.lesson_balance.lesson_balance.subscriptions.model import Subscription

TODAY = date(2024, 3, 1)


class InMemorySubscriptions:
    def __init__(self, items):
        self._items = list(items)

    def list_for_student(self, student_id: str):
        return [s for s in self._items if s.student_id == student_id]

    def list_all(self):
        return list(self._items)


class InMemoryLessons:
    def __init__(self, items):
        self._items = {l.lesson_id: l for l in items}
        self.totals_updates: list[str] = []

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        return self._items.get(lesson_id)

    def list_for_group(self, group_id: str):
        return [l for l in self._items.values() if l.group_id == group_id]

    def update_totals(self, *, lesson_id: str, total_amount: Decimal, uncovered_count: int) -> bool:
        self._items[lesson_id] = replace(self._items[lesson_id], total_amount=total_amount, uncovered_count=uncovered_count)
        self.totals_updates.append(lesson_id)
        return True


class InMemoryAttendance:
    def __init__(self, items):
        self._items = {m.mark_id: m for m in items}
        self.charge_updates: list[str] = []

    def get(self, mark_id: str) -> AttendanceMark:
        return self._items[mark_id]

    def list_for_student(self, student_id: str):
        return [m for m in self._items.values() if m.student_id == student_id]

    def list_for_lesson(self, lesson_id: str):
        return [m for m in self._items.values() if m.lesson_id == lesson_id]

    def update_charge(self, *, mark_id: str, payment_amount: Decimal, is_uncovered: bool) -> bool:
        self._items[mark_id] = replace(self._items[mark_id], payment_amount=payment_amount, is_uncovered=is_uncovered)
        self.charge_updates.append(mark_id)
        return True


class AllowAll:
    def student_exists(self, student_id: str) -> bool:
        return True

    def group_exists(self, group_id: str) -> bool:
        return True


def build():
    subscriptions = InMemorySubscriptions(
        [
            Subscription(
                subscription_id="p1",
                student_id="s1",
                group_id="g1",
                lessons_total=2,
                purchase_date=date(2024, 1, 1),
                price=Decimal("100"),
            )
        ]
    )
    lessons = InMemoryLessons(
        [
            Lesson(lesson_id=f"l{d}", group_id="g1", date=date(2024, 1, d), time=time(18, 0), status=LessonStatus.COMPLETED)
            for d in (10, 17, 24)
        ]
    )
    attendance = InMemoryAttendance(
        [
            AttendanceMark(mark_id="a10", lesson_id="l10", student_id="s1", status=AttendanceStatus.PRESENT),
            AttendanceMark(mark_id="a17", lesson_id="l17", student_id="s1", status=AttendanceStatus.PRESENT),
            AttendanceMark(mark_id="a24", lesson_id="l24", student_id="s1", status=AttendanceStatus.PRESENT),
            AttendanceMark(
                mark_id="b10",
                lesson_id="l10",
                student_id="s2",
                status=AttendanceStatus.PRESENT,
                payment_amount=Decimal("30.00"),
            ),
        ]
    )
    balances = BalanceService(subscriptions, lessons, attendance, AllowAll())
    return RevenueService(balances, subscriptions, lessons, attendance), lessons, attendance


def test_paid_lessons_get_per_lesson_price_and_depleted_one_is_uncovered():
    svc, lessons, attendance = build()

    update = svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY)

    assert update.changed_mark_ids == ("a10", "a17", "a24")
    assert attendance.get("a10").payment_amount == Decimal("50.00")
    assert attendance.get("a17").payment_amount == Decimal("50.00")
    assert attendance.get("a24").payment_amount == Decimal("0")
    assert attendance.get("a24").is_uncovered is True


def test_lesson_totals_include_every_student_at_the_lesson():
    svc, lessons, _ = build()

    update = svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY)

    totals = {t.lesson_id: t for t in update.lesson_totals}
    assert totals["l10"].total_amount == Decimal("80.00")
    assert totals["l24"].uncovered_count == 1
    assert lessons.get_by_id("l10").total_amount == Decimal("80.00")
    assert lessons.get_by_id("l24").uncovered_count == 1


def test_second_run_writes_nothing():
    svc, lessons, attendance = build()
    svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY)
    attendance.charge_updates.clear()
    lessons.totals_updates.clear()

    update = svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY)

    assert update.changed_mark_ids == ()
    assert update.touched_lesson_ids == ()
    assert attendance.charge_updates == []
    assert lessons.totals_updates == []


def test_trigger_lesson_is_always_recalculated():
    svc, lessons, _ = build()
    svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY)
    lessons.totals_updates.clear()

    update = svc.update_student_revenue(student_id="s1", group_id="g1", today=TODAY, trigger_lesson_id="l17")

    assert update.touched_lesson_ids == ("l17",)
    assert lessons.totals_updates == ["l17"]
    assert update.lesson_totals[0].total_amount == Decimal("50.00")
