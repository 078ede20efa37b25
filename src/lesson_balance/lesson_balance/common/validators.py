from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")
    return value.strip()


def require_non_negative_int(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative integer")
    return value


def require_amount(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return amount


def require_fields(
    record: Mapping[str, Any],
    *,
    entity: str,
    required: Iterable[str],
    optional: Iterable[str] = (),
) -> None:
    """Reject records with missing required fields or fields nobody knows about."""

    required = set(required)
    allowed = required | set(optional)

    missing = sorted(f for f in required if record.get(f) is None)
    if missing:
        raise ValidationError(f"{entity}: missing required field(s) {', '.join(missing)}")

    unknown = sorted(set(record) - allowed)
    if unknown:
        raise ValidationError(f"{entity}: unknown field(s) {', '.join(unknown)}")
