# src/taskviews/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import fields, replace
from datetime import UTC, date, datetime
from typing import Any

from ..core.errors import InvalidRangeError, NotFoundError, OutOfRangeError, ValidationError
from .task_models import EDITABLE_FIELDS, Task, TaskDraft, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    In-memory task collection; the single source of truth for every view.

    Construct one instance at the composition root and inject it where needed
    (router, projection hub). There is no module-level instance.

    Writes are all-or-nothing:
    - a merged copy of the record is validated first
    - only a valid copy replaces the stored record
    """

    def __init__(self, tasks: Iterable[Task] | None = None, *, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or _utc_now
        self._tasks: dict[int, Task] = {}
        for task in tasks or ():
            self.check_task(task)
            self._tasks[task.id] = task
        self._next_id = max(self._tasks, default=0) + 1
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- low-level helpers ----

    def _now(self) -> datetime:
        return self._clock()

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    @staticmethod
    def _require_text(name: str, value: Any) -> str:
        if value is None or not str(value).strip():
            raise ValidationError(f"{name} is required")
        return str(value).strip()

    @staticmethod
    def _coerce_date(name: str, value: Any) -> date | None:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError:
            raise ValidationError(f"{name} is not a date: {value!r}") from None

    @staticmethod
    def _coerce_field(name: str, value: Any) -> Any:
        """Normalize one incoming field value to its stored type."""
        if name == "status":
            try:
                return TaskStatus(value)
            except ValueError:
                raise ValidationError(f"unknown status: {value!r}") from None
        if name == "priority":
            try:
                return TaskPriority(value)
            except ValueError:
                raise ValidationError(f"unknown priority: {value!r}") from None
        if name in ("start_date", "due_date", "completed_date"):
            return TaskStore._coerce_date(name, value)
        if name == "progress":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"progress must be an integer, got {value!r}")
            return value
        if name in ("description", "created_by"):
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be text, got {value!r}")
            return value
        if name in ("estimated_hours", "actual_hours"):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"{name} must be a number, got {value!r}")
            return float(value)
        if name in ("project_id", "assignee_id"):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValidationError(f"{name} must be an integer id or None, got {value!r}")
            return value
        if name in ("dependencies", "tags"):
            if isinstance(value, str) or not isinstance(value, Iterable):
                raise ValidationError(f"{name} must be a list")
            items = list(value)
            if name == "tags":
                return [str(v) for v in items]
            try:
                return [int(v) for v in items]
            except (TypeError, ValueError):
                raise ValidationError(f"dependencies must be task ids: {items!r}") from None
        return value

    @staticmethod
    def check_task(task: Task) -> None:
        """Raise the matching TaskError if a whole record breaks a store invariant."""
        if not task.title.strip():
            raise ValidationError("title is required", task_id=task.id)
        if not task.assignee.strip():
            raise ValidationError("assignee is required", task_id=task.id)
        if task.due_date is None:
            raise ValidationError("due_date is required", task_id=task.id)
        if task.start_date is not None and task.start_date > task.due_date:
            raise InvalidRangeError(
                f"start_date {task.start_date} is after due_date {task.due_date}",
                task_id=task.id,
            )
        if not 0 <= task.progress <= 100:
            raise OutOfRangeError(f"progress {task.progress} is outside 0..100", task_id=task.id)

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"task {task_id} not found", task_id=task_id)
        return task

    def get_all(self) -> list[Task]:
        """
        Current contents in insertion order.

        The list is a new snapshot of the live records on every call, so callers
        can sort or trim it freely; the Task objects themselves are the stored ones.
        """
        return list(self._tasks.values())

    def create(self, draft: TaskDraft) -> Task:
        title = self._require_text("title", draft.title)
        assignee = self._require_text("assignee", draft.assignee)
        if draft.due_date is None:
            raise ValidationError("due_date is required")

        values = {f.name: getattr(draft, f.name) for f in fields(draft)}
        values.update(title=title, assignee=assignee)
        for name, value in values.items():
            if name not in ("title", "assignee"):
                values[name] = self._coerce_field(name, value)

        now = self._now()
        task = Task(id=self._next_id, created_at=now, updated_at=now, **values)
        self.check_task(task)

        task.id = self._allocate_id()
        self._tasks[task.id] = task
        logger.debug(
            "Task created id=%s status=%s project=%s due=%s",
            task.id,
            task.status.value,
            task.project_id,
            task.due_date,
        )
        return task

    def update(self, task_id: int, changes: Mapping[str, Any]) -> Task:
        """
        Merge `changes` into the task, refresh updated_at and return the new record.

        Raises NotFoundError for an unknown id and ValidationError /
        InvalidRangeError / OutOfRangeError for an invalid merged record;
        in every error case the stored record is left as it was.
        """
        current = self.get(task_id)

        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"fields not editable: {', '.join(unknown)}", task_id=task_id)

        coerced = {name: self._coerce_field(name, value) for name, value in changes.items()}
        if "title" in coerced:
            coerced["title"] = self._require_text("title", coerced["title"])
        if "assignee" in coerced:
            coerced["assignee"] = self._require_text("assignee", coerced["assignee"])

        # Never move updated_at backwards, even if the wall clock does.
        now = max(self._now(), current.updated_at)
        merged = replace(current, updated_at=now, **coerced)
        try:
            self.check_task(merged)
        except (ValidationError, InvalidRangeError, OutOfRangeError) as e:
            e.task_id = task_id
            raise

        self._tasks[task_id] = merged
        return merged

    def remove(self, task_id: int) -> Task:
        """Take a task out of the collection (external deletion path only)."""
        task = self._tasks.pop(task_id, None)
        if task is None:
            raise NotFoundError(f"task {task_id} not found", task_id=task_id)
        logger.debug("Task removed id=%s", task_id)
        return task
