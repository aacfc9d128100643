# src/taskviews/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Workflow status of a task.

    Board columns are derived from this enum in declaration order.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls(raw)
        except ValueError:
            return cls.TODO


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}


@dataclass(slots=True)
class TaskDraft:
    """
    Everything a creation form hands over; id and timestamps are assigned by the store.
    """

    title: str
    assignee: str
    due_date: date | None

    description: str = ""
    project_id: int | None = None
    assignee_id: int | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    start_date: date | None = None
    completed_date: date | None = None
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    progress: int = 0
    dependencies: list[int] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_by: str = ""


@dataclass(slots=True)
class Task:
    id: int
    title: str
    assignee: str
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    description: str = ""
    project_id: int | None = None  # None == unassigned
    assignee_id: int | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    start_date: date | None = None
    completed_date: date | None = None
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    progress: int = 0

    # No cycle detection and no check against removed tasks.
    dependencies: list[int] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_by: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            elif isinstance(value, list):
                value = list(value)
            out[f.name] = value
        return out

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=int(raw["id"]),
            title=str(raw.get("title") or ""),
            assignee=str(raw.get("assignee") or ""),
            due_date=_parse_date(raw.get("due_date")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            description=str(raw.get("description") or ""),
            project_id=_opt_int(raw.get("project_id")),
            assignee_id=_opt_int(raw.get("assignee_id")),
            status=TaskStatus.from_raw(raw.get("status")),
            priority=TaskPriority.from_raw(raw.get("priority")),
            start_date=_parse_date(raw.get("start_date")),
            completed_date=_parse_date(raw.get("completed_date")),
            estimated_hours=float(raw.get("estimated_hours") or 0.0),
            actual_hours=float(raw.get("actual_hours") or 0.0),
            progress=int(raw.get("progress") or 0),
            dependencies=[int(d) for d in raw.get("dependencies") or []],
            tags=[str(t) for t in raw.get("tags") or []],
            created_by=str(raw.get("created_by") or ""),
        )


# Fields a partial update may touch. id and both timestamps are owned by the store.
EDITABLE_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(Task) if f.name not in {"id", "created_at", "updated_at"}
)


def _parse_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw)[:10])


def _opt_int(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    return int(raw)
