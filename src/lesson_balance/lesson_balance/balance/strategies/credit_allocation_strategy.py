from __future__ import annotations

import logging
from typing import Optional

from ...core.enums import AttendanceStatus, AuditOutcome, AuditReason
from ...lessons.model import Lesson
from ...subscriptions.validity import covers
from ..aggregator import aggregate
from ..allocation import AllocationState
from ..model import AuditEntry, BalanceAuditResult
from .base import BalanceInputs, BalanceStrategy, make_entry

logger = logging.getLogger(__name__)


class CreditAllocationStrategy(BalanceStrategy):
    """Walk the group's lessons in order and charge each one to at most one pass.

    Passes are tried oldest purchase first. Consecutive passes also pay for
    past lessons nobody marked; invalid skips are only ever charged to
    consecutive passes.
    """

    def calculate(self, inputs: BalanceInputs) -> BalanceAuditResult:
        state = AllocationState(inputs.passes)
        entries: list[AuditEntry] = []

        for lesson in inputs.lessons:
            mark = inputs.marks_by_lesson.get(lesson.lesson_id)
            attendance_status = mark.status if mark else None

            auto_consume = False
            if mark is None:
                auto_consume = self._auto_consumes(lesson, inputs)
                if not auto_consume:
                    continue

            if lesson.is_cancelled:
                entries.append(make_entry(lesson, attendance_status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_CANCELLED))
                continue
            if attendance_status == AttendanceStatus.ABSENCE_VALID:
                entries.append(make_entry(lesson, attendance_status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_VALID_SKIP))
                continue

            is_present = auto_consume or attendance_status == AttendanceStatus.PRESENT
            is_invalid_skip = attendance_status == AttendanceStatus.ABSENCE_INVALID
            if not (is_present or is_invalid_skip):
                entries.append(make_entry(lesson, attendance_status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_NO_ATTENDANCE))
                continue

            entries.append(
                self._allocate(
                    lesson,
                    attendance_status,
                    inputs=inputs,
                    state=state,
                    auto_consume=auto_consume,
                    is_present=is_present,
                )
            )

        return aggregate(group_id=inputs.group_id, entries=entries, passes=inputs.passes, state=state)

    @staticmethod
    def _auto_consumes(lesson: Lesson, inputs: BalanceInputs) -> bool:
        if lesson.date >= inputs.today:
            return False
        return any(p.is_consecutive and covers(p, lesson.date, inputs.today) for p in inputs.passes)

    @staticmethod
    def _allocate(
        lesson: Lesson,
        attendance_status: Optional[AttendanceStatus],
        *,
        inputs: BalanceInputs,
        state: AllocationState,
        auto_consume: bool,
        is_present: bool,
    ) -> AuditEntry:
        consecutive_only = auto_consume or not is_present
        if auto_consume:
            paid_reason = AuditReason.COUNTED_NO_ATTENDANCE_CONSECUTIVE
        elif is_present:
            paid_reason = AuditReason.COUNTED_PRESENT
        else:
            paid_reason = AuditReason.COUNTED_ABSENCE_INVALID

        has_candidate = False
        has_consecutive_candidate = False
        for p in inputs.passes:
            if not covers(p, lesson.date, inputs.today):
                continue
            has_candidate = True
            if p.is_consecutive:
                has_consecutive_candidate = True
            elif consecutive_only:
                continue

            if not state.has_capacity(p.subscription_id):
                continue

            state.charge(p.subscription_id)
            logger.debug("lesson %s charged to pass %s (%s)", lesson.lesson_id, p.subscription_id, paid_reason.value)
            return make_entry(lesson, attendance_status, AuditOutcome.COUNTED, paid_reason, p.subscription_id)

        if is_present or has_consecutive_candidate:
            reason = AuditReason.UNCOVERED_PASS_DEPLETED if has_candidate else AuditReason.UNCOVERED_NO_MATCHING_PASS
            logger.debug("lesson %s uncovered (%s)", lesson.lesson_id, reason.value)
            return make_entry(lesson, attendance_status, AuditOutcome.COUNTED, reason)

        return make_entry(lesson, attendance_status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_NO_ATTENDANCE)
