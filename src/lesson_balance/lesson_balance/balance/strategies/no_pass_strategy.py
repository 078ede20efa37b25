from __future__ import annotations

from ...core.enums import AttendanceStatus, AuditOutcome, AuditReason
from ..aggregator import aggregate
from ..allocation import AllocationState
from ..model import BalanceAuditResult
from .base import BalanceInputs, BalanceStrategy, make_entry


class NoPassStrategy(BalanceStrategy):
    """Student holds no pass for the group: every attended lesson is debt.

    An invalid skip with no pass to charge does not create debt by itself.
    """

    def calculate(self, inputs: BalanceInputs) -> BalanceAuditResult:
        entries = []
        for lesson in inputs.lessons:
            mark = inputs.marks_by_lesson.get(lesson.lesson_id)
            if mark is None:
                continue

            if lesson.is_cancelled:
                entries.append(make_entry(lesson, mark.status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_CANCELLED))
            elif mark.status == AttendanceStatus.ABSENCE_VALID:
                entries.append(make_entry(lesson, mark.status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_VALID_SKIP))
            elif mark.status == AttendanceStatus.PRESENT:
                entries.append(make_entry(lesson, mark.status, AuditOutcome.COUNTED, AuditReason.UNCOVERED_NO_MATCHING_PASS))
            else:
                entries.append(make_entry(lesson, mark.status, AuditOutcome.NOT_COUNTED, AuditReason.NOT_COUNTED_NO_ATTENDANCE))

        return aggregate(
            group_id=inputs.group_id,
            entries=entries,
            passes=inputs.passes,
            state=AllocationState(inputs.passes),
        )
