# src/taskviews/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from ..core.state import AppState
from .task_models import Task, TaskDraft, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


def create_task(
    state: AppState,
    *,
    title: str,
    assignee: str,
    due_date: date | None,
    project_id: int | None = None,
    **fields: Any,
) -> Task:
    """
    Convenience helper for a creation form: build a draft and submit it.
    Goes through the router so every view refreshes.
    A known assignee name also fills in assignee_id from the user directory.
    """
    if project_id is None:
        project_id = state.hub.scope_project_id
    if "assignee_id" not in fields and assignee:
        user = state.users.find_by_name(assignee)
        if user is not None:
            fields["assignee_id"] = user.id
    draft = TaskDraft(
        title=title,
        assignee=assignee,
        due_date=due_date,
        project_id=project_id,
        **fields,
    )
    return state.router.create(draft)


def duplicate_task(state: AppState, task_id: int) -> Task:
    """
    Copy an existing task as a fresh todo item.

    Progress, actual hours and completion date start over; scheduling,
    ownership, tags and dependencies are carried over.
    """
    src = state.store.get(task_id)
    draft = TaskDraft(
        title=f"{src.title} (copy)",
        assignee=src.assignee,
        due_date=src.due_date,
        description=src.description,
        project_id=src.project_id,
        assignee_id=src.assignee_id,
        status=TaskStatus.TODO,
        priority=TaskPriority(src.priority),
        start_date=src.start_date,
        completed_date=None,
        estimated_hours=src.estimated_hours,
        actual_hours=0.0,
        progress=0,
        dependencies=list(src.dependencies),
        tags=list(src.tags),
        created_by=src.created_by,
    )
    task = state.router.create(draft)
    logger.info("Duplicated task %s as %s", task_id, task.id)
    return task
