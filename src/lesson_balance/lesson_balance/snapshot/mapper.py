"""Map document-store records (plain dicts) onto the domain value types.

Records are rejected here, at the boundary, when a required field is missing
or a field is not part of the record shape.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..attendance.model import AttendanceMark
from ..common.datetime_utils import parse_iso_date, parse_lesson_time
from ..common.validators import require_amount, require_fields, require_non_negative_int
from ..core.constants import ZERO_AMOUNT
from ..core.enums import AttendanceStatus, LessonStatus, SubscriptionStatus
from ..core.exceptions import ValidationError
from ..lessons.model import Lesson
from ..subscriptions.model import Subscription

# Bookkeeping fields the document store adds to every record.
_STORE_FIELDS = ("_creationTime", "userId")

LESSON_REQUIRED = ("_id", "group_id", "date", "time", "status")
LESSON_OPTIONAL = (
    "duration_minutes",
    "schedule_id",
    "students_count",
    "total_amount",
    "uncovered_count",
    "notes",
    "info_for_students",
) + _STORE_FIELDS

ATTENDANCE_REQUIRED = ("_id", "lesson_id", "student_id", "status")
ATTENDANCE_OPTIONAL = ("payment_amount", "is_uncovered") + _STORE_FIELDS

SUBSCRIPTION_REQUIRED = ("_id", "user_id", "group_id", "lessons_total", "purchase_date")
SUBSCRIPTION_OPTIONAL = (
    "expiry_date",
    "is_consecutive",
    "status",
    "price",
    "tariff_id",
    "type",
    "duration_days",
) + _STORE_FIELDS


def normalize_id(record: Mapping[str, Any]) -> dict:
    """Accept both ``_id`` and ``id`` as the record identity."""

    data = dict(record)
    if "_id" not in data and "id" in data:
        data["_id"] = data.pop("id")
    if data.get("_id") is not None:
        data["_id"] = str(data["_id"])
    return data


def _enum(enum_cls, value: Any, entity: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{entity}: unknown status {value!r}")


def _flag(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def lesson_from_record(record: Mapping[str, Any]) -> Lesson:
    r = normalize_id(record)
    require_fields(r, entity="lesson", required=LESSON_REQUIRED, optional=LESSON_OPTIONAL)
    return Lesson(
        lesson_id=r["_id"],
        group_id=str(r["group_id"]),
        date=parse_iso_date(r["date"]),
        time=parse_lesson_time(r["time"]),
        status=_enum(LessonStatus, r["status"], "lesson"),
        total_amount=require_amount(r.get("total_amount") or 0, "total_amount"),
        uncovered_count=require_non_negative_int(r.get("uncovered_count") or 0, "uncovered_count"),
    )


def attendance_from_record(record: Mapping[str, Any]) -> AttendanceMark:
    r = normalize_id(record)
    require_fields(r, entity="attendance", required=ATTENDANCE_REQUIRED, optional=ATTENDANCE_OPTIONAL)
    payment = r.get("payment_amount")
    return AttendanceMark(
        mark_id=r["_id"],
        lesson_id=str(r["lesson_id"]),
        student_id=str(r["student_id"]),
        status=_enum(AttendanceStatus, r["status"], "attendance"),
        payment_amount=require_amount(payment, "payment_amount") if payment is not None else None,
        is_uncovered=_flag(r.get("is_uncovered", False), "is_uncovered"),
    )


def subscription_from_record(record: Mapping[str, Any]) -> Subscription:
    r = normalize_id(record)
    require_fields(r, entity="subscription", required=SUBSCRIPTION_REQUIRED, optional=SUBSCRIPTION_OPTIONAL)
    status = r.get("status")
    expiry = r.get("expiry_date")
    return Subscription(
        subscription_id=r["_id"],
        student_id=str(r["user_id"]),
        group_id=str(r["group_id"]),
        lessons_total=require_non_negative_int(r["lessons_total"], "lessons_total"),
        purchase_date=parse_iso_date(r["purchase_date"]),
        expiry_date=parse_iso_date(expiry) if expiry else None,
        is_consecutive=_flag(r.get("is_consecutive", False), "is_consecutive"),
        status=_enum(SubscriptionStatus, status, "subscription") if status else None,
        price=require_amount(r["price"], "price") if r.get("price") is not None else ZERO_AMOUNT,
    )
