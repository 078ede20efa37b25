from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..subscriptions.model import Subscription
from .strategies.base import BalanceStrategy
from .strategies.credit_allocation_strategy import CreditAllocationStrategy
from .strategies.no_pass_strategy import NoPassStrategy


@dataclass
class BalanceStrategyFactory:
    """Factory Pattern: the no-pass path only applies when the student holds zero passes."""

    def for_passes(self, passes: Sequence[Subscription]) -> BalanceStrategy:
        if not passes:
            return NoPassStrategy()
        return CreditAllocationStrategy()
