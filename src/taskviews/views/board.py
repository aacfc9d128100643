# src/taskviews/views/board.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date

from ..tasks.task_models import Task, TaskPriority, TaskStatus
from ..tasks.task_mutations import MutationRouter, StatusMove
from ..tasks.task_projection import ProjectionHub, ViewConfig
from .base import GestureResult, ViewAdapter
from .presentation import PRIORITY_COLORS, STATUS_COLORS, STATUS_LABELS

MAX_CARD_TAGS = 3


@dataclass(frozen=True, slots=True)
class BoardCard:
    task_id: int
    title: str
    status: TaskStatus
    priority: TaskPriority
    priority_color: str
    assignee: str
    due_date: date | None
    progress: int
    tags: tuple[str, ...]
    hidden_tags: int
    project_id: int | None


@dataclass(slots=True)
class BoardColumn:
    status: TaskStatus
    title: str
    color: str
    cards: list[BoardCard] = field(default_factory=list)


BoardModel = dict[TaskStatus, BoardColumn]


def _card(task: Task) -> BoardCard:
    return BoardCard(
        task_id=task.id,
        title=task.title,
        status=task.status,
        priority=task.priority,
        priority_color=PRIORITY_COLORS[task.priority],
        assignee=task.assignee,
        due_date=task.due_date,
        progress=task.progress,
        tags=tuple(task.tags[:MAX_CARD_TAGS]),
        hidden_tags=max(0, len(task.tags) - MAX_CARD_TAGS),
        project_id=task.project_id,
    )


class BoardAdapter(ViewAdapter[BoardModel]):
    """Kanban board: one column per status, cards in projection order."""

    name = "board"

    def __init__(
        self,
        hub: ProjectionHub,
        router: MutationRouter,
        config: ViewConfig | None = None,
    ) -> None:
        config = config or ViewConfig()
        config.group_by = "status"
        super().__init__(hub, router, config)

    def build_model(self, tasks: list[Task]) -> BoardModel:
        columns: BoardModel = {
            s: BoardColumn(status=s, title=STATUS_LABELS[s], color=STATUS_COLORS[s])
            for s in TaskStatus
        }
        for task in tasks:
            columns[task.status].cards.append(_card(task))
        return columns

    def column(self, status: TaskStatus | str) -> BoardColumn:
        return self.model[TaskStatus(status)]

    def card_ids(self, status: TaskStatus | str) -> list[int]:
        return [c.task_id for c in self.column(status).cards]

    def _locate(self, task_id: int) -> BoardCard | None:
        for col in self.model.values():
            for card in col.cards:
                if card.task_id == task_id:
                    return card
        return None

    def drop(self, task_id: int, new_status: TaskStatus | str) -> GestureResult:
        """Card dropped onto a column."""
        card = self._locate(task_id)
        if card is not None and card.status == new_status:
            self.cancel_drag()
            return GestureResult(ok=True)

        def move_card(model: BoardModel) -> None:
            if card is None:
                return
            try:
                target = TaskStatus(new_status)
            except ValueError:
                # the router rejects it; nothing to show meanwhile
                return
            model[card.status].cards.remove(card)
            model[target].cards.append(replace(card, status=target))

        return self.commit(StatusMove(task_id, new_status), optimistic=move_card)
