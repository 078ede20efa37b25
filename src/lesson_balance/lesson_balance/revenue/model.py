from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LessonTotals:
    lesson_id: str
    total_amount: Decimal
    uncovered_count: int


@dataclass(frozen=True)
class RevenueUpdate:
    """What one revenue recalculation wrote."""

    changed_mark_ids: tuple[str, ...]
    lesson_totals: tuple[LessonTotals, ...]

    @property
    def touched_lesson_ids(self) -> tuple[str, ...]:
        return tuple(t.lesson_id for t in self.lesson_totals)
