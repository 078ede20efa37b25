from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_empty, require_non_negative_int
from ..core.constants import ZERO_AMOUNT
from ..core.enums import SubscriptionStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Subscription:
    """Domain entity: a purchased pass of lesson credits for one group.

    The validity window is [purchase_date, expiry_date], open-ended when
    expiry_date is None. A None status means the status was never set and is
    treated like ACTIVE.
    """

    subscription_id: str
    student_id: str
    group_id: str
    lessons_total: int
    purchase_date: date
    expiry_date: Optional[date] = None
    is_consecutive: bool = False
    status: Optional[SubscriptionStatus] = None
    price: Decimal = ZERO_AMOUNT

    def __post_init__(self) -> None:
        require_non_empty(self.subscription_id, "subscription_id")
        require_non_empty(self.student_id, "student_id")
        require_non_empty(self.group_id, "group_id")
        require_non_negative_int(self.lessons_total, "lessons_total")
        if not isinstance(self.purchase_date, date):
            raise ValidationError("purchase_date must be a date")
        if self.expiry_date is not None:
            if not isinstance(self.expiry_date, date):
                raise ValidationError("expiry_date must be a date")
            if self.expiry_date < self.purchase_date:
                raise ValidationError("expiry_date must not be before purchase_date")
        if self.status is not None and not isinstance(self.status, SubscriptionStatus):
            raise ValidationError(f"Unknown subscription status: {self.status!r}")
        if self.price < 0:
            raise ValidationError("price must not be negative")

    @property
    def is_archived(self) -> bool:
        return self.status == SubscriptionStatus.ARCHIVED

    @property
    def is_active(self) -> bool:
        """Active or unset."""
        return self.status in (None, SubscriptionStatus.ACTIVE)
