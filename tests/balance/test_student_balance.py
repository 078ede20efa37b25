from datetime import date, time

from src.lesson_balance.lesson_balance.attendance.model import AttendanceMark
from src.lesson_balance.lesson_balance.balance.engine import calculate_student_balance
from src.lesson_balance.lesson_balance.core.enums import AttendanceStatus, LessonStatus
from src.lesson_balance.lesson_balance.lessons.model import Lesson
from src.lesson_balance.lesson_balance.subscriptions.model import Subscription


def lesson(lesson_id: str, group_id: str, day: int) -> Lesson:
    return Lesson(lesson_id=lesson_id, group_id=group_id, date=date(2024, 1, day), time=time(18, 0), status=LessonStatus.COMPLETED)


def mark(lesson_id: str, status=AttendanceStatus.PRESENT, student_id: str = "s1") -> AttendanceMark:
    return AttendanceMark(mark_id=f"m-{lesson_id}-{student_id}", lesson_id=lesson_id, student_id=student_id, status=status)


def test_surplus_and_debt_are_summed_per_group():
    subscriptions = [
        Subscription(subscription_id="p1", student_id="s1", group_id="g1", lessons_total=2, purchase_date=date(2024, 1, 1)),
        Subscription(subscription_id="p-other", student_id="s2", group_id="g4", lessons_total=10, purchase_date=date(2024, 1, 1)),
    ]
    lessons = [
        lesson("g1-a", "g1", 2),
        lesson("g2-a", "g2", 3),
        lesson("g2-b", "g2", 10),
        lesson("g3-a", "g3", 4),
    ]
    attendance = [
        mark("g1-a"),
        mark("g2-a"),
        mark("g2-b"),
        mark("g3-a", AttendanceStatus.ABSENCE_VALID),
        mark("unknown-lesson"),
    ]

    summary = calculate_student_balance("s1", subscriptions, attendance, lessons, today=date(2024, 3, 1))

    assert summary.surplus == 1
    assert summary.debt == 2
    assert [(u.lesson_id, u.group_id) for u in summary.uncovered_lessons] == [("g2-a", "g2"), ("g2-b", "g2")]


def test_student_without_passes_or_marks_has_nothing():
    summary = calculate_student_balance("s1", [], [], [], today=date(2024, 3, 1))

    assert summary.surplus == 0
    assert summary.debt == 0
    assert summary.uncovered_lessons == ()
