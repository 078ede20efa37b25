from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import NotFoundError
from ..lessons.repository import LessonRepository
from ..subscriptions.expiry import find_expired
from ..subscriptions.repository import SubscriptionRepository
from .engine import calculate_student_balance, calculate_student_group_balance_with_audit
from .factory import BalanceStrategyFactory
from .model import BalanceAuditResult, StudentBalance, StudentBalanceSummary
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class BalanceService:
    def __init__(
        self,
        subscriptions: SubscriptionRepository,
        lessons: LessonRepository,
        attendance: AttendanceRepository,
        roster: RosterRepository,
        *,
        strategy_factory: BalanceStrategyFactory | None = None,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._subscriptions = subscriptions
        self._lessons = lessons
        self._attendance = attendance
        self._roster = roster
        self._factory = strategy_factory or BalanceStrategyFactory()
        self._timezone = timezone

    def _resolve_today(self, today: Optional[date]) -> date:
        return today or today_local(self._timezone)

    def _require_student(self, student_id: str) -> str:
        student_id = require_non_empty(student_id, "student_id")
        if not self._roster.student_exists(student_id):
            raise NotFoundError(f"Student {student_id} not found")
        return student_id

    def _require_group(self, group_id: str) -> str:
        group_id = require_non_empty(group_id, "group_id")
        if not self._roster.group_exists(group_id):
            raise NotFoundError(f"Group {group_id} not found")
        return group_id

    def get_group_audit(self, *, student_id: str, group_id: str, today: Optional[date] = None) -> BalanceAuditResult:
        student_id = self._require_student(student_id)
        group_id = self._require_group(group_id)
        today = self._resolve_today(today)

        result = calculate_student_group_balance_with_audit(
            student_id,
            group_id,
            self._subscriptions.list_for_student(student_id),
            self._attendance.list_for_student(student_id),
            self._lessons.list_for_group(group_id),
            today=today,
            strategy_factory=self._factory,
        )
        logger.info(
            "Recomputed balance student=%s group=%s balance=%d owed=%d covered=%d",
            student_id,
            group_id,
            result.balance,
            result.lessons_owed,
            result.lessons_covered,
        )
        return result

    def get_group_balance(self, *, student_id: str, group_id: str, today: Optional[date] = None) -> StudentBalance:
        return self.get_group_audit(student_id=student_id, group_id=group_id, today=today).to_balance()

    def get_student_summary(self, *, student_id: str, today: Optional[date] = None) -> StudentBalanceSummary:
        student_id = self._require_student(student_id)
        today = self._resolve_today(today)

        subscriptions = list(self._subscriptions.list_for_student(student_id))
        attendance = list(self._attendance.list_for_student(student_id))

        group_ids = {s.group_id for s in subscriptions}
        for mark in attendance:
            lesson = self._lessons.get_by_id(mark.lesson_id)
            if lesson:
                group_ids.add(lesson.group_id)

        lessons = [l for group_id in sorted(group_ids) for l in self._lessons.list_for_group(group_id)]
        return calculate_student_balance(student_id, subscriptions, attendance, lessons, today=today)

    def archive_expired(self, *, today: Optional[date] = None) -> list[str]:
        """Archive every active pass whose expiry date has passed.

        Returns the ids of the passes that were archived.
        """

        today = self._resolve_today(today)
        archived: list[str] = []
        for subscription in find_expired(self._subscriptions.list_all(), today):
            if self._subscriptions.archive(subscription_id=subscription.subscription_id):
                archived.append(subscription.subscription_id)

        if archived:
            logger.info("Archived %d expired pass(es): %s", len(archived), ", ".join(archived))
        return archived
