from __future__ import annotations

from typing import Iterable

from ..core.exceptions import DomainError
from ..subscriptions.model import Subscription


class AllocationState:
    """Remaining and used credits per pass for a single allocation run.

    For every pass ``used + remaining == lessons_total`` holds at all times.
    """

    def __init__(self, passes: Iterable[Subscription]):
        self._total: dict[str, int] = {p.subscription_id: p.lessons_total for p in passes}
        self._remaining: dict[str, int] = dict(self._total)
        self._used: dict[str, int] = {pass_id: 0 for pass_id in self._total}

    def remaining(self, pass_id: str) -> int:
        return self._remaining.get(pass_id, 0)

    def used(self, pass_id: str) -> int:
        return self._used.get(pass_id, 0)

    def has_capacity(self, pass_id: str) -> bool:
        return self.remaining(pass_id) > 0

    def charge(self, pass_id: str) -> None:
        if not self.has_capacity(pass_id):
            raise DomainError(f"Pass {pass_id} has no remaining credits")
        self._remaining[pass_id] -= 1
        self._used[pass_id] += 1

    def used_counts(self) -> dict[str, int]:
        return dict(self._used)
