from __future__ import annotations

from datetime import date

from .model import Subscription


def covers(subscription: Subscription, lesson_date: date, today: date) -> bool:
    """Whether the pass may pay for a lesson on ``lesson_date``.

    Past lessons can still use a pass that has since been archived or has
    lapsed; lessons dated today or later only use passes that are still open.
    """

    if lesson_date < subscription.purchase_date:
        return False
    if subscription.expiry_date is not None and lesson_date > subscription.expiry_date:
        return False
    if lesson_date >= today:
        if subscription.is_archived:
            return False
        if subscription.expiry_date is not None and subscription.expiry_date < today:
            return False
    return True
