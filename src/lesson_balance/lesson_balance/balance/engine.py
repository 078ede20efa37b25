"""Balance reconciliation entry points.

Every call is a full recomputation from the supplied collections: no state is
kept between calls and the current date is always passed in, so identical
inputs always give identical results.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceMark
from ..lessons.model import Lesson
from ..subscriptions.model import Subscription
from .factory import BalanceStrategyFactory
from .model import BalanceAuditResult, StudentBalance, StudentBalanceSummary, UncoveredLesson
from .ordering import sort_lessons, sort_passes
from .strategies.base import BalanceInputs

logger = logging.getLogger(__name__)


def build_inputs(
    student_id: str,
    group_id: str,
    subscriptions: Iterable[Subscription],
    attendance: Iterable[AttendanceMark],
    lessons: Iterable[Lesson],
    *,
    today: date,
) -> BalanceInputs:
    """Narrow raw collections to one (student, group) pair and put them in allocation order.

    Marks pointing at lessons outside the group (or unknown lessons) are dropped.
    """

    passes = sort_passes(s for s in subscriptions if s.student_id == student_id and s.group_id == group_id)
    group_lessons = sort_lessons(l for l in lessons if l.group_id == group_id)
    lesson_ids = {l.lesson_id for l in group_lessons}

    marks_by_lesson = {
        m.lesson_id: m
        for m in attendance
        if m.student_id == student_id and m.lesson_id in lesson_ids
    }

    return BalanceInputs(
        student_id=student_id,
        group_id=group_id,
        passes=tuple(passes),
        lessons=tuple(group_lessons),
        marks_by_lesson=marks_by_lesson,
        today=today,
    )


def calculate_student_group_balance_with_audit(
    student_id: str,
    group_id: str,
    subscriptions: Iterable[Subscription],
    attendance: Iterable[AttendanceMark],
    lessons: Iterable[Lesson],
    *,
    today: date,
    strategy_factory: Optional[BalanceStrategyFactory] = None,
) -> BalanceAuditResult:
    inputs = build_inputs(student_id, group_id, subscriptions, attendance, lessons, today=today)
    strategy = (strategy_factory or BalanceStrategyFactory()).for_passes(inputs.passes)
    result = strategy.calculate(inputs)

    logger.debug(
        "balance student=%s group=%s today=%s strategy=%s balance=%d owed=%d covered=%d",
        student_id,
        group_id,
        today.isoformat(),
        type(strategy).__name__,
        result.balance,
        result.lessons_owed,
        result.lessons_covered,
    )
    return result


def calculate_student_group_balance(
    student_id: str,
    group_id: str,
    subscriptions: Iterable[Subscription],
    attendance: Iterable[AttendanceMark],
    lessons: Iterable[Lesson],
    *,
    today: date,
) -> StudentBalance:
    """Balance without the audit trail; delegates to the audit variant."""

    return calculate_student_group_balance_with_audit(
        student_id, group_id, subscriptions, attendance, lessons, today=today
    ).to_balance()


def calculate_student_balance(
    student_id: str,
    subscriptions: Iterable[Subscription],
    attendance: Iterable[AttendanceMark],
    lessons: Iterable[Lesson],
    *,
    today: date,
) -> StudentBalanceSummary:
    """Surplus and debt of one student summed over every group they take part in.

    A group takes part when the student holds a pass for it or has a mark on
    one of its lessons.
    """

    subscriptions = list(subscriptions)
    attendance = list(attendance)
    lessons = list(lessons)
    group_by_lesson = {l.lesson_id: l.group_id for l in lessons}

    group_ids = {s.group_id for s in subscriptions if s.student_id == student_id}
    group_ids.update(
        group_by_lesson[m.lesson_id]
        for m in attendance
        if m.student_id == student_id and m.lesson_id in group_by_lesson
    )

    surplus = 0
    debt = 0
    uncovered: list[UncoveredLesson] = []
    for group_id in sorted(group_ids):
        group_balance = calculate_student_group_balance(
            student_id, group_id, subscriptions, attendance, lessons, today=today
        )
        if group_balance.balance > 0:
            surplus += group_balance.balance
        else:
            debt += abs(group_balance.balance)
        uncovered.extend(group_balance.uncovered_lessons)

    return StudentBalanceSummary(surplus=surplus, debt=debt, uncovered_lessons=tuple(uncovered))
