# src/taskviews/views/table.py

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from ..core.ports import ProjectDirectory
from ..tasks.task_models import Task, TaskPriority, TaskStatus
from ..tasks.task_mutations import FieldEdit, MutationRouter, ProgressChange, StatusMove
from ..tasks.task_projection import ProjectionHub, ViewConfig
from .base import GestureResult, ViewAdapter
from .presentation import PRIORITY_LABELS, STATUS_LABELS, UNASSIGNED_PROJECT

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True, slots=True)
class TableRow:
    task_id: int
    title: str
    description: str
    project: str
    assignee: str
    status: TaskStatus
    status_label: str
    priority: TaskPriority
    priority_label: str
    start_date: date | None
    due_date: date | None
    progress: int
    tags: tuple[str, ...]


@dataclass(slots=True)
class TableModel:
    rows: list[TableRow] = field(default_factory=list)
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.rows) / self.page_size))

    @property
    def page_rows(self) -> list[TableRow]:
        start = self.page_index * self.page_size
        return self.rows[start:start + self.page_size]


class TableAdapter(ViewAdapter[TableModel]):
    """Paged list with inline status / progress / cell edits."""

    name = "table"

    def __init__(
        self,
        hub: ProjectionHub,
        router: MutationRouter,
        config: ViewConfig | None = None,
        *,
        projects: ProjectDirectory | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._projects = projects
        self._page_size = max(1, int(page_size))
        self._page_index = 0
        super().__init__(hub, router, config)

    def _project_name(self, project_id: int | None) -> str:
        if project_id is None or self._projects is None:
            return UNASSIGNED_PROJECT
        project = self._projects.get_project(project_id)
        return project.name if project is not None else UNASSIGNED_PROJECT

    def _row(self, task: Task) -> TableRow:
        return TableRow(
            task_id=task.id,
            title=task.title,
            description=task.description,
            project=self._project_name(task.project_id),
            assignee=task.assignee,
            status=task.status,
            status_label=STATUS_LABELS[task.status],
            priority=task.priority,
            priority_label=PRIORITY_LABELS[task.priority],
            start_date=task.start_date,
            due_date=task.due_date,
            progress=task.progress,
            tags=tuple(task.tags),
        )

    def build_model(self, tasks: list[Task]) -> TableModel:
        model = TableModel(rows=[self._row(t) for t in tasks], page_size=self._page_size)
        # Keep the page across refreshes, but not past the end.
        model.page_index = min(self._page_index, model.page_count - 1)
        return model

    def set_page(self, index: int) -> None:
        self._page_index = max(0, min(int(index), self.model.page_count - 1))
        self.model.page_index = self._page_index

    def row(self, task_id: int) -> TableRow | None:
        for r in self.model.rows:
            if r.task_id == task_id:
                return r
        return None

    def _patch_row(self, task_id: int, **changes: Any):
        def patch(model: TableModel) -> None:
            for i, r in enumerate(model.rows):
                if r.task_id == task_id:
                    model.rows[i] = replace(r, **changes)
                    return

        return patch

    # ---- inline edits ----

    def edit_status(self, task_id: int, new_status: TaskStatus | str) -> GestureResult:
        patch = None
        if new_status in STATUS_LABELS:
            status = TaskStatus(new_status)
            patch = self._patch_row(task_id, status=status, status_label=STATUS_LABELS[status])
        return self.commit(StatusMove(task_id, new_status), optimistic=patch)

    def edit_progress(self, task_id: int, new_progress: int) -> GestureResult:
        return self.commit(
            ProgressChange(task_id, new_progress),
            optimistic=self._patch_row(task_id, progress=new_progress),
        )

    def edit_cell(self, task_id: int, field_name: str, value: Any) -> GestureResult:
        # No optimistic patch: the cell keeps its old text until the store accepts it.
        return self.commit(FieldEdit(task_id, {field_name: value}))
