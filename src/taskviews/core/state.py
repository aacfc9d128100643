# src/taskviews/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_mutations import MutationRouter
from ..tasks.task_projection import ProjectionHub
from ..tasks.task_store import TaskStore
from ..views.base import ViewAdapter
from .ports import ProjectDirectory, UserDirectory


@dataclass
class AppState:
    """Everything the hosting shell works with, wired once at the composition root."""

    settings: Any

    store: TaskStore
    hub: ProjectionHub
    router: MutationRouter
    projects: ProjectDirectory
    users: UserDirectory

    views: dict[str, ViewAdapter[Any]] = field(default_factory=dict)
    active_view: str = "board"

    @property
    def view(self) -> ViewAdapter[Any]:
        return self.views[self.active_view]
