from __future__ import annotations

from typing import Iterable

from ..lessons.model import Lesson
from ..subscriptions.model import Subscription


def sort_lessons(lessons: Iterable[Lesson]) -> list[Lesson]:
    """Allocation sequence: by date, then time. Ties keep their input order."""

    return sorted(lessons, key=lambda l: (l.date, l.time))


def sort_passes(passes: Iterable[Subscription]) -> list[Subscription]:
    """Charging order: oldest purchase first, pass id as the final tie-break."""

    return sorted(passes, key=lambda p: (p.purchase_date, p.subscription_id))
