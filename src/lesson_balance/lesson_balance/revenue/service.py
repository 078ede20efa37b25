from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..balance.service import BalanceService
from ..core.constants import ZERO_AMOUNT
from ..lessons.repository import LessonRepository
from ..subscriptions.repository import SubscriptionRepository
from .calculator.base import LessonPriceCalculator
from .calculator.standard_calculator import StandardLessonPriceCalculator
from .model import LessonTotals, RevenueUpdate

logger = logging.getLogger(__name__)


class RevenueService:
    """Turns a student's balance audit into per-lesson revenue.

    Marks are only written when their computed charge differs from the stored
    one, so re-running without input changes writes nothing.
    """

    def __init__(
        self,
        balances: BalanceService,
        subscriptions: SubscriptionRepository,
        lessons: LessonRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[LessonPriceCalculator] = None,
    ):
        self._balances = balances
        self._subscriptions = subscriptions
        self._lessons = lessons
        self._attendance = attendance
        self._calculator = calculator or StandardLessonPriceCalculator()

    def update_student_revenue(
        self,
        *,
        student_id: str,
        group_id: str,
        today: Optional[date] = None,
        trigger_lesson_id: Optional[str] = None,
    ) -> RevenueUpdate:
        audit = self._balances.get_group_audit(student_id=student_id, group_id=group_id, today=today)

        passes = {s.subscription_id: s for s in self._subscriptions.list_for_student(student_id)}
        marks = {m.lesson_id: m for m in self._attendance.list_for_student(student_id)}

        changed: list[str] = []
        touched: list[str] = []
        for entry in audit.audit_entries:
            mark = marks.get(entry.lesson_id)
            # Auto-consumed lessons have no mark to carry the charge.
            if mark is None:
                continue

            paying_pass = passes.get(entry.covered_by_pass_id) if entry.covered_by_pass_id else None
            cost = self._calculator.cost(entry, paying_pass)
            is_uncovered = entry.is_uncovered

            if mark.payment_amount != cost or mark.is_uncovered != is_uncovered:
                self._attendance.update_charge(mark_id=mark.mark_id, payment_amount=cost, is_uncovered=is_uncovered)
                changed.append(mark.mark_id)
                if entry.lesson_id not in touched:
                    touched.append(entry.lesson_id)

        # The trigger lesson may have lost this student's mark entirely.
        if trigger_lesson_id and trigger_lesson_id not in touched:
            touched.append(trigger_lesson_id)

        totals = tuple(self._recalculate_lesson(lesson_id) for lesson_id in touched)
        if changed:
            logger.info(
                "Revenue updated student=%s group=%s marks=%d lessons=%d",
                student_id,
                group_id,
                len(changed),
                len(totals),
            )
        return RevenueUpdate(changed_mark_ids=tuple(changed), lesson_totals=totals)

    def _recalculate_lesson(self, lesson_id: str) -> LessonTotals:
        marks = self._attendance.list_for_lesson(lesson_id)
        total_amount = sum((m.payment_amount or ZERO_AMOUNT for m in marks), ZERO_AMOUNT)
        uncovered_count = sum(1 for m in marks if m.is_uncovered)

        self._lessons.update_totals(lesson_id=lesson_id, total_amount=total_amount, uncovered_count=uncovered_count)
        return LessonTotals(lesson_id=lesson_id, total_amount=total_amount, uncovered_count=uncovered_count)
