# src/taskviews/tasks/task_projection.py

from __future__ import annotations

"""
View projection.

project() derives the ordered task sequence one view renders. The step order
is fixed: project scope, then filter, then sort. Search and the other filter
predicates only ever see the scoped set, and the stable sort runs last.

ProjectionHub is what adapters hold on to: it answers project(config) against
the live store and fans out a payload-free "task changed" signal after every
successful mutation.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.ports import TaskChangeListener, TaskRepo
from .task_filter import TaskFilter, filter_tasks
from .task_models import Task
from .task_sort import SortKey, SortOrder, sort_tasks

logger = logging.getLogger(__name__)


def project(
    tasks: Iterable[Task],
    scope_project_id: int | None,
    filter_spec: TaskFilter | None,
    sort_by: SortKey | str = SortKey.DUE_DATE,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[Task]:
    scoped = [t for t in tasks if scope_project_id is None or t.project_id == scope_project_id]
    return sort_tasks(filter_tasks(scoped, filter_spec), sort_by, sort_order)


@dataclass(slots=True)
class ViewConfig:
    """Per-view session state. Owned by the view, never persisted by the core."""

    filter_spec: TaskFilter = field(default_factory=TaskFilter)
    sort_by: SortKey = SortKey.DUE_DATE
    sort_order: SortOrder = SortOrder.ASC
    group_by: str | None = None  # board view groups by "status"


class ProjectionHub:
    """
    Read side shared by every adapter.

    - project(config): the projected sequence for one view
    - subscribe(listener): called with no arguments after each change
    - task_changed(): synchronous fan-out, once per successful mutation
    """

    def __init__(self, store: TaskRepo, *, scope_project_id: int | None = None) -> None:
        self._store = store
        self._scope_project_id = scope_project_id
        self._listeners: list[TaskChangeListener] = []

    @property
    def scope_project_id(self) -> int | None:
        return self._scope_project_id

    def set_scope(self, project_id: int | None) -> None:
        if project_id == self._scope_project_id:
            return
        logger.debug("Projection scope %s -> %s", self._scope_project_id, project_id)
        self._scope_project_id = project_id
        self.task_changed()

    def project(self, config: ViewConfig) -> list[Task]:
        return project(
            self._store.get_all(),
            self._scope_project_id,
            config.filter_spec,
            config.sort_by,
            config.sort_order,
        )

    def subscribe(self, listener: TaskChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TaskChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def task_changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                # One broken view must not leave the others stale.
                logger.exception("Task change listener failed: %r", listener)
