from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from ..attendance.model import AttendanceMark
from ..core.exceptions import ValidationError
from ..lessons.model import Lesson
from ..subscriptions.model import Subscription
from .mapper import attendance_from_record, lesson_from_record, normalize_id, subscription_from_record

logger = logging.getLogger(__name__)

COLLECTIONS = ("lessons", "attendance", "subscriptions", "students", "groups")


class Snapshot:
    """One consistent in-memory copy of the records a balance is computed from.

    Shared by the snapshot repositories the way a database connection is
    shared by SQL repositories.
    """

    def __init__(
        self,
        *,
        lessons: Iterable[Lesson] = (),
        attendance: Iterable[AttendanceMark] = (),
        subscriptions: Iterable[Subscription] = (),
        student_ids: Optional[Iterable[str]] = None,
        group_ids: Optional[Iterable[str]] = None,
    ):
        self.lessons: dict[str, Lesson] = _index(lessons, "lesson_id", "lesson")
        self.marks: dict[str, AttendanceMark] = _index(attendance, "mark_id", "attendance")
        self.subscriptions: dict[str, Subscription] = _index(subscriptions, "subscription_id", "subscription")

        seen: set[tuple[str, str]] = set()
        for m in self.marks.values():
            key = (m.lesson_id, m.student_id)
            if key in seen:
                raise ValidationError(f"Duplicate attendance for lesson {m.lesson_id} and student {m.student_id}")
            seen.add(key)

        if student_ids is None:
            student_ids = {s.student_id for s in self.subscriptions.values()} | {m.student_id for m in self.marks.values()}
        if group_ids is None:
            group_ids = {l.group_id for l in self.lessons.values()} | {s.group_id for s in self.subscriptions.values()}
        self.student_ids: set[str] = set(student_ids)
        self.group_ids: set[str] = set(group_ids)

    @classmethod
    def from_records(cls, data: Mapping[str, Any]) -> "Snapshot":
        """Build from a document dump: ``{"lessons": [...], "attendance": [...], "subscriptions": [...]}``.

        ``students`` and ``groups`` are optional lists of ids or records; when
        absent they are derived from the other collections.
        """

        unknown = sorted(set(data) - set(COLLECTIONS))
        if unknown:
            raise ValidationError(f"snapshot: unknown collection(s) {', '.join(unknown)}")

        return cls(
            lessons=[lesson_from_record(r) for r in data.get("lessons", [])],
            attendance=[attendance_from_record(r) for r in data.get("attendance", [])],
            subscriptions=[subscription_from_record(r) for r in data.get("subscriptions", [])],
            student_ids=_roster_ids(data["students"]) if "students" in data else None,
            group_ids=_roster_ids(data["groups"]) if "groups" in data else None,
        )


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"{path}: invalid JSON ({e.msg} at line {e.lineno})")
    if not isinstance(data, dict):
        raise ValidationError(f"{path}: snapshot must be a JSON object")

    snapshot = Snapshot.from_records(data)
    logger.info(
        "Loaded snapshot %s (lessons=%d marks=%d passes=%d)",
        path,
        len(snapshot.lessons),
        len(snapshot.marks),
        len(snapshot.subscriptions),
    )
    return snapshot


def _index(items: Iterable[Any], id_attr: str, entity: str) -> dict:
    out: dict = {}
    for item in items:
        key = getattr(item, id_attr)
        if key in out:
            raise ValidationError(f"Duplicate {entity} id {key}")
        out[key] = item
    return out


def _roster_ids(items: Iterable[Any]) -> set[str]:
    ids = set()
    for item in items:
        if isinstance(item, Mapping):
            item = normalize_id(item).get("_id")
        if item is None or not str(item).strip():
            raise ValidationError("Roster entries need an id")
        ids.add(str(item))
    return ids
