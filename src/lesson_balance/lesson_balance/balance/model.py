from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus, AuditOutcome, AuditReason


@dataclass(frozen=True)
class AuditEntry:
    """One counted/not-counted decision for a single lesson."""

    lesson_id: str
    lesson_date: date
    lesson_time: time
    attendance_status: Optional[AttendanceStatus]
    outcome: AuditOutcome
    reason: AuditReason
    covered_by_pass_id: Optional[str] = None

    @property
    def is_counted(self) -> bool:
        return self.outcome == AuditOutcome.COUNTED

    @property
    def is_uncovered(self) -> bool:
        return self.is_counted and self.covered_by_pass_id is None

    def to_dict(self) -> dict:
        return {
            "lesson_id": self.lesson_id,
            "lesson_date": self.lesson_date.isoformat(),
            "lesson_time": self.lesson_time.strftime("%H:%M"),
            "attendance_status": self.attendance_status.value if self.attendance_status else None,
            "status": self.outcome.value,
            "reason": self.reason.value,
            "covered_by_pass_id": self.covered_by_pass_id,
        }


@dataclass(frozen=True)
class UncoveredLesson:
    lesson_id: str
    date: date
    group_id: str

    def to_dict(self) -> dict:
        return {"lesson_id": self.lesson_id, "date": self.date.isoformat(), "group_id": self.group_id}


@dataclass(frozen=True)
class PassUsage:
    pass_id: str
    lessons_used: int
    lessons_total: int
    purchase_date: date
    expiry_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "pass_id": self.pass_id,
            "lessons_used": self.lessons_used,
            "lessons_total": self.lessons_total,
            "purchase_date": self.purchase_date.isoformat(),
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
        }


@dataclass(frozen=True)
class StudentBalance:
    """Balance of one student in one group. Negative balance = debt."""

    balance: int
    lessons_owed: int
    lessons_covered: int
    uncovered_lessons: tuple[UncoveredLesson, ...]

    def to_dict(self) -> dict:
        return {
            "balance": self.balance,
            "lessons_owed": self.lessons_owed,
            "lessons_covered": self.lessons_covered,
            "uncovered_lessons": [u.to_dict() for u in self.uncovered_lessons],
        }


@dataclass(frozen=True)
class BalanceAuditResult(StudentBalance):
    audit_entries: tuple[AuditEntry, ...] = ()
    pass_usage: tuple[PassUsage, ...] = ()

    def to_balance(self) -> StudentBalance:
        return StudentBalance(
            balance=self.balance,
            lessons_owed=self.lessons_owed,
            lessons_covered=self.lessons_covered,
            uncovered_lessons=self.uncovered_lessons,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["audit_entries"] = [e.to_dict() for e in self.audit_entries]
        data["pass_usage"] = [p.to_dict() for p in self.pass_usage]
        return data


@dataclass(frozen=True)
class StudentBalanceSummary:
    """Balance of one student across all of their groups."""

    surplus: int
    debt: int
    uncovered_lessons: tuple[UncoveredLesson, ...]
