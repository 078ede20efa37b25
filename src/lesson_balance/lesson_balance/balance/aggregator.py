from __future__ import annotations

from typing import Sequence

from ..subscriptions.model import Subscription
from .allocation import AllocationState
from .model import AuditEntry, BalanceAuditResult, PassUsage, UncoveredLesson


def aggregate(
    *,
    group_id: str,
    entries: Sequence[AuditEntry],
    passes: Sequence[Subscription],
    state: AllocationState,
) -> BalanceAuditResult:
    """Fold audit entries and pass usage into the final balance.

    Capacity counts passes that are still active (or unset) plus archived
    passes that actually paid for something, so historical usage keeps
    balancing after a pass is archived.
    """

    used = state.used_counts()

    lessons_owed = sum(1 for e in entries if e.is_counted)
    lessons_covered = sum(1 for e in entries if e.covered_by_pass_id is not None)
    total_capacity = sum(
        p.lessons_total
        for p in passes
        if p.is_active or used.get(p.subscription_id, 0) > 0
    )

    uncovered = tuple(
        UncoveredLesson(lesson_id=e.lesson_id, date=e.lesson_date, group_id=group_id)
        for e in entries
        if e.is_uncovered
    )
    pass_usage = tuple(
        PassUsage(
            pass_id=p.subscription_id,
            lessons_used=used.get(p.subscription_id, 0),
            lessons_total=p.lessons_total,
            purchase_date=p.purchase_date,
            expiry_date=p.expiry_date,
        )
        for p in passes
    )

    return BalanceAuditResult(
        balance=total_capacity - lessons_owed,
        lessons_owed=lessons_owed,
        lessons_covered=lessons_covered,
        uncovered_lessons=uncovered,
        audit_entries=tuple(entries),
        pass_usage=pass_usage,
    )
