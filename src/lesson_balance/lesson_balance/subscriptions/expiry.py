from __future__ import annotations

from datetime import date
from typing import Iterable

from .model import Subscription


def find_expired(subscriptions: Iterable[Subscription], today: date) -> list[Subscription]:
    """Passes still active (or unset) whose expiry date has already passed."""

    return [
        s
        for s in subscriptions
        if s.is_active and s.expiry_date is not None and s.expiry_date < today
    ]
