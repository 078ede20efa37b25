from __future__ import annotations

from typing import Protocol, Sequence

from .model import Subscription

class SubscriptionRepository(Protocol):
    def list_for_student(self, student_id: str) -> Sequence[Subscription]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Subscription]:
        raise NotImplementedError

    def archive(self, *, subscription_id: str) -> bool:
        raise NotImplementedError
