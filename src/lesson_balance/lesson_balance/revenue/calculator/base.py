from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ...balance.model import AuditEntry
from ...subscriptions.model import Subscription


class LessonPriceCalculator(ABC):
    """Calculator interface (Strategy Pattern for lesson revenue)."""

    @abstractmethod
    def cost(self, entry: AuditEntry, paying_pass: Optional[Subscription]) -> Decimal:
        raise NotImplementedError
