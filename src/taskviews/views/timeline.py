# src/taskviews/views/timeline.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import StrEnum

from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_mutations import DateMove, MutationRouter, ProgressChange
from ..tasks.task_projection import ProjectionHub, ViewConfig
from .base import GestureResult, ViewAdapter
from .presentation import PRIORITY_COLORS, STATUS_COLORS


class TimelineScale(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True, slots=True)
class TimelineBar:
    task_id: int
    name: str
    start: date
    end: date
    progress: int
    status: TaskStatus
    color: str
    progress_color: str
    dependencies: tuple[int, ...]
    project_id: int | None


@dataclass(slots=True)
class TimelineModel:
    bars: list[TimelineBar] = field(default_factory=list)
    scale: TimelineScale = TimelineScale.WEEK

    @property
    def span(self) -> tuple[date, date] | None:
        if not self.bars:
            return None
        return min(b.start for b in self.bars), max(b.end for b in self.bars)


class TimelineAdapter(ViewAdapter[TimelineModel]):
    """Gantt-style bars; moving or resizing a bar becomes a DateMove."""

    name = "timeline"

    def __init__(
        self,
        hub: ProjectionHub,
        router: MutationRouter,
        config: ViewConfig | None = None,
        *,
        scale: TimelineScale = TimelineScale.WEEK,
        show_dependencies: bool = True,
    ) -> None:
        self._scale = TimelineScale(scale)
        self.show_dependencies = show_dependencies
        super().__init__(hub, router, config)

    def build_model(self, tasks: list[Task]) -> TimelineModel:
        bars: list[TimelineBar] = []
        for t in tasks:
            if t.due_date is None:
                continue
            bars.append(
                TimelineBar(
                    task_id=t.id,
                    name=t.title,
                    start=t.start_date or t.due_date,
                    end=t.due_date,
                    progress=t.progress,
                    status=t.status,
                    color=STATUS_COLORS[t.status],
                    progress_color=PRIORITY_COLORS[t.priority],
                    dependencies=tuple(t.dependencies) if self.show_dependencies else (),
                    project_id=t.project_id,
                )
            )
        return TimelineModel(bars=bars, scale=self._scale)

    def set_scale(self, scale: TimelineScale | str) -> None:
        self._scale = TimelineScale(scale)
        self.model.scale = self._scale

    def bar(self, task_id: int) -> TimelineBar | None:
        for b in self.model.bars:
            if b.task_id == task_id:
                return b
        return None

    def _patch_bar(self, task_id: int, **changes):
        def patch(model: TimelineModel) -> None:
            for i, b in enumerate(model.bars):
                if b.task_id == task_id:
                    model.bars[i] = replace(b, **changes)
                    return

        return patch

    def move_bar(self, task_id: int, new_start: date, new_end: date) -> GestureResult:
        """Bar dragged or resized; the end of a bar is the task's due date."""
        return self.commit(
            DateMove(task_id, new_start, new_end),
            optimistic=self._patch_bar(task_id, start=new_start, end=new_end),
        )

    def change_progress(self, task_id: int, new_progress: int) -> GestureResult:
        return self.commit(
            ProgressChange(task_id, new_progress),
            optimistic=self._patch_bar(task_id, progress=new_progress),
        )
