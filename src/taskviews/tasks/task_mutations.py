# src/taskviews/tasks/task_mutations.py

from __future__ import annotations

"""
Mutation router.

Every write a view can make (board drop, timeline bar move, calendar event
resize, table inline edit) arrives here as one of four intents. Validation
lives here once instead of once per view.

submit() is synchronous and atomic for the caller:
- validate the intent
- apply it through the store (which validates the merged record)
- notify the projection hub so every adapter re-derives its model

Errors are raised to the caller only; nothing is applied and nobody else is
notified.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..core.errors import InvalidRangeError, OutOfRangeError, TaskError, ValidationError
from ..core.ports import TaskRepo
from .task_models import Task, TaskDraft, TaskStatus
from .task_projection import ProjectionHub

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatusMove:
    task_id: int
    new_status: TaskStatus | str


@dataclass(frozen=True, slots=True)
class DateMove:
    task_id: int
    new_start: date
    new_due: date


@dataclass(frozen=True, slots=True)
class ProgressChange:
    task_id: int
    new_progress: int


@dataclass(frozen=True, slots=True)
class FieldEdit:
    task_id: int
    fields: Mapping[str, Any] = field(default_factory=dict)


MutationIntent = StatusMove | DateMove | ProgressChange | FieldEdit


def _status_changes(intent: StatusMove) -> dict[str, Any]:
    try:
        status = TaskStatus(intent.new_status)
    except ValueError:
        raise ValidationError(
            f"unknown status: {intent.new_status!r}", task_id=intent.task_id
        ) from None
    # No progress coupling: moving to done leaves progress alone.
    return {"status": status}


def _date_changes(intent: DateMove) -> dict[str, Any]:
    if not isinstance(intent.new_start, date) or not isinstance(intent.new_due, date):
        raise ValidationError("date move needs both a start and a due date", task_id=intent.task_id)
    if intent.new_start > intent.new_due:
        raise InvalidRangeError(
            f"start {intent.new_start} is after due {intent.new_due}", task_id=intent.task_id
        )
    return {"start_date": intent.new_start, "due_date": intent.new_due}


def _progress_changes(intent: ProgressChange) -> dict[str, Any]:
    value = intent.new_progress
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"progress must be an integer, got {value!r}", task_id=intent.task_id)
    if not 0 <= value <= 100:
        raise OutOfRangeError(f"progress {value} is outside 0..100", task_id=intent.task_id)
    return {"progress": value}


def _field_changes(intent: FieldEdit) -> dict[str, Any]:
    if not intent.fields:
        raise ValidationError("field edit with no fields", task_id=intent.task_id)
    # Merged-record checks (required fields, date order, progress) happen in the store.
    return dict(intent.fields)


_VALIDATORS: dict[type, Callable[[Any], dict[str, Any]]] = {
    StatusMove: _status_changes,
    DateMove: _date_changes,
    ProgressChange: _progress_changes,
    FieldEdit: _field_changes,
}


class MutationRouter:
    """Single write entry point for all views."""

    def __init__(self, store: TaskRepo, hub: ProjectionHub) -> None:
        self._store = store
        self._hub = hub

    def submit(self, intent: MutationIntent) -> Task:
        validate = _VALIDATORS.get(type(intent))
        if validate is None:
            raise TypeError(f"not a mutation intent: {intent!r}")

        try:
            changes = validate(intent)
            task = self._store.update(intent.task_id, changes)
        except TaskError as e:
            logger.info(
                "Mutation rejected %s task_id=%s: %s", type(intent).__name__, intent.task_id, e
            )
            raise

        logger.debug(
            "Mutation applied %s task_id=%s fields=%s",
            type(intent).__name__,
            task.id,
            sorted(changes),
        )
        self._hub.task_changed()
        return task

    def create(self, draft: TaskDraft) -> Task:
        """Store a new task from a creation form and let every view pick it up."""
        task = self._store.create(draft)
        logger.debug("Task created via router id=%s", task.id)
        self._hub.task_changed()
        return task
