from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...balance.model import AuditEntry
from ...core.constants import PRICE_QUANTUM, ZERO_AMOUNT
from ...subscriptions.model import Subscription
from .base import LessonPriceCalculator


class StandardLessonPriceCalculator(LessonPriceCalculator):
    """Standard rule: a pass-paid lesson costs price / lessons_total; anything else costs 0."""

    def cost(self, entry: AuditEntry, paying_pass: Optional[Subscription]) -> Decimal:
        if not entry.is_counted or entry.covered_by_pass_id is None:
            return ZERO_AMOUNT
        if paying_pass is None or paying_pass.lessons_total <= 0:
            return ZERO_AMOUNT
        per_lesson = Decimal(paying_pass.price) / paying_pass.lessons_total
        return per_lesson.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
