# src/taskviews/views/base.py

"""
Shared adapter plumbing.

An adapter turns the projected task sequence into its own display model and
turns its own gestures into router intents. It never patches its model from a
mutation result: after every successful mutation the hub calls refresh() and
the model is rebuilt from project(config).

Gestures are optimistic:
- the adapter applies a view-only change to its model right away
- the intent goes to the router
- on failure the model is rebuilt from the last known-good projection and the
  error is kept in last_error (and returned), never raised
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..core.errors import TaskError
from ..tasks.task_filter import TaskFilter
from ..tasks.task_models import Task
from ..tasks.task_mutations import MutationIntent, MutationRouter
from ..tasks.task_projection import ProjectionHub, ViewConfig
from ..tasks.task_sort import SortKey, SortOrder

logger = logging.getLogger(__name__)

M = TypeVar("M")


@dataclass(frozen=True, slots=True)
class GestureResult:
    ok: bool
    task: Task | None = None
    error: TaskError | None = None

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        return "ok" if self.task is not None else "no change"


class ViewAdapter(Generic[M]):
    name = "view"

    def __init__(
        self,
        hub: ProjectionHub,
        router: MutationRouter,
        config: ViewConfig | None = None,
    ) -> None:
        self.hub = hub
        self.router = router
        self.config = config or ViewConfig()

        self.tasks: list[Task] = []  # last known-good projection
        self.model: M = self.build_model([])
        self.last_error: TaskError | None = None
        self.refresh_count = 0
        self._dragging: int | None = None

        hub.subscribe(self.refresh)
        self.refresh()

    def close(self) -> None:
        self.hub.unsubscribe(self.refresh)

    # ---- read side ----

    def build_model(self, tasks: list[Task]) -> M:
        raise NotImplementedError

    def refresh(self) -> None:
        self.tasks = self.hub.project(self.config)
        self.model = self.build_model(self.tasks)
        self.refresh_count += 1

    def set_filter(self, spec: TaskFilter) -> None:
        self.config.filter_spec = spec
        self.refresh()

    def set_sort(self, sort_by: SortKey | str, order: SortOrder | str = SortOrder.ASC) -> None:
        self.config.sort_by = SortKey(sort_by)
        self.config.sort_order = SortOrder(order)
        self.refresh()

    # ---- gestures ----

    @property
    def dragging(self) -> int | None:
        return self._dragging

    def begin_drag(self, task_id: int) -> None:
        self._dragging = task_id

    def cancel_drag(self) -> None:
        """Abandoned gesture: put the model back and never talk to the router."""
        self._dragging = None
        self.model = self.build_model(self.tasks)

    def commit(
        self,
        intent: MutationIntent,
        optimistic: Callable[[M], None] | None = None,
    ) -> GestureResult:
        self._dragging = None
        if optimistic is not None:
            optimistic(self.model)

        try:
            task = self.router.submit(intent)
        except TaskError as e:
            self.last_error = e
            self.model = self.build_model(self.tasks)
            logger.info("%s view reverted %s: %s", self.name, type(intent).__name__, e.message)
            return GestureResult(ok=False, error=e)

        self.last_error = None
        return GestureResult(ok=True, task=task)

    def find_task(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None
