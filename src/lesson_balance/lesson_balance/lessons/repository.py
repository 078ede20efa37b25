from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Lesson

class LessonRepository(Protocol):
    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        raise NotImplementedError

    def list_for_group(self, group_id: str) -> Sequence[Lesson]:
        raise NotImplementedError

    def update_totals(self, *, lesson_id: str, total_amount: Decimal, uncovered_count: int) -> bool:
        """Persist the per-lesson revenue totals derived from its attendance marks."""

        raise NotImplementedError
