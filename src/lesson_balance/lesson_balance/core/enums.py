from __future__ import annotations

from enum import Enum


class LessonStatus(str, Enum):
    """Lifecycle of a scheduled lesson."""

    UPCOMING = "upcoming"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class AttendanceStatus(str, Enum):
    """Attendance mark recorded for one student at one lesson."""

    PRESENT = "present"
    ABSENCE_VALID = "absence_valid"
    ABSENCE_INVALID = "absence_invalid"


class SubscriptionStatus(str, Enum):
    """Lifecycle of a purchased pass. A missing status means "unset"."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class AuditOutcome(str, Enum):
    COUNTED = "counted"
    NOT_COUNTED = "not_counted"


class AuditReason(str, Enum):
    """Why a lesson was or was not counted against the student's balance."""

    COUNTED_PRESENT = "counted_present"
    COUNTED_ABSENCE_INVALID = "counted_absence_invalid"
    COUNTED_NO_ATTENDANCE_CONSECUTIVE = "counted_no_attendance_consecutive"
    NOT_COUNTED_VALID_SKIP = "not_counted_valid_skip"
    NOT_COUNTED_NO_ATTENDANCE = "not_counted_no_attendance"
    NOT_COUNTED_CANCELLED = "not_counted_cancelled"
    UNCOVERED_PASS_DEPLETED = "uncovered_pass_depleted"
    UNCOVERED_NO_MATCHING_PASS = "uncovered_no_matching_pass"

    @property
    def is_uncovered(self) -> bool:
        return self in (AuditReason.UNCOVERED_PASS_DEPLETED, AuditReason.UNCOVERED_NO_MATCHING_PASS)
