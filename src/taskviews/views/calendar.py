# src/taskviews/views/calendar.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, timedelta

from ..tasks.task_models import Task, TaskPriority, TaskStatus
from ..tasks.task_mutations import DateMove, MutationRouter
from ..tasks.task_projection import ProjectionHub, ViewConfig
from .base import GestureResult, ViewAdapter
from .presentation import PRIORITY_COLORS, STATUS_BACKGROUNDS

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """All-day event. `end` is exclusive: a task due on the 8th ends on the 9th."""

    task_id: int
    title: str
    start: date
    end: date
    status: TaskStatus
    priority: TaskPriority
    background: str
    border: str
    assignee: str
    progress: int
    all_day: bool = True

    def covers(self, day: date) -> bool:
        return self.start <= day < self.end


CalendarModel = list[CalendarEvent]


class CalendarAdapter(ViewAdapter[CalendarModel]):
    name = "calendar"

    def __init__(
        self,
        hub: ProjectionHub,
        router: MutationRouter,
        config: ViewConfig | None = None,
        *,
        visible_statuses: Iterable[TaskStatus | str] | None = None,
    ) -> None:
        # View-local toggle on top of the projection; it does not touch the filter spec.
        self._visible: frozenset[TaskStatus] = frozenset(
            TaskStatus(s) for s in (visible_statuses if visible_statuses is not None else TaskStatus)
        )
        super().__init__(hub, router, config)

    @property
    def visible_statuses(self) -> frozenset[TaskStatus]:
        return self._visible

    def set_visible_statuses(self, statuses: Iterable[TaskStatus | str]) -> None:
        self._visible = frozenset(TaskStatus(s) for s in statuses)
        self.model = self.build_model(self.tasks)

    def build_model(self, tasks: list[Task]) -> CalendarModel:
        events: CalendarModel = []
        for t in tasks:
            if t.due_date is None or t.status not in self._visible:
                continue
            events.append(
                CalendarEvent(
                    task_id=t.id,
                    title=t.title,
                    start=t.start_date or t.due_date,
                    end=t.due_date + ONE_DAY,
                    status=t.status,
                    priority=t.priority,
                    background=STATUS_BACKGROUNDS[t.status],
                    border=PRIORITY_COLORS[t.priority],
                    assignee=t.assignee,
                    progress=t.progress,
                )
            )
        return events

    def event(self, task_id: int) -> CalendarEvent | None:
        for e in self.model:
            if e.task_id == task_id:
                return e
        return None

    def events_on(self, day: date) -> list[CalendarEvent]:
        return [e for e in self.model if e.covers(day)]

    def move_event(self, task_id: int, new_start: date, new_end_exclusive: date) -> GestureResult:
        """Event dragged or resized. The calendar's exclusive end maps back to due = end - 1 day."""
        new_due = new_end_exclusive - ONE_DAY

        def patch(model: CalendarModel) -> None:
            for i, e in enumerate(model):
                if e.task_id == task_id:
                    model[i] = replace(e, start=new_start, end=new_end_exclusive)
                    return

        return self.commit(DateMove(task_id, new_start, new_due), optimistic=patch)
