# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskviews.cli.bootstrap import create_initial_state
from taskviews.core.state import AppState
from taskviews.tasks.task_models import TaskPriority, TaskStatus
from taskviews.tasks.task_mutations import MutationRouter
from taskviews.tasks.task_projection import ProjectionHub
from taskviews.tasks.task_store import TaskStore

from .fakes import StepClock, make_draft


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskviews-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
        save_tasks=True,
        seed_demo_data=False,
        console_enabled=False,
        default_view="board",
        default_sort_by="dueDate",
        default_sort_order="asc",
        table_page_size=20,
    )


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(clock: StepClock) -> TaskStore:
    """
    Three tasks across two projects:
    1: project 1, todo, low,    2024-01-01..2024-01-08
    2: project 1, review, urgent, 2024-01-03..2024-01-05
    3: project 2, in-progress, medium, due 2024-01-10
    """
    s = TaskStore(clock=clock)
    s.create(make_draft(title="Plan sprint", project_id=1, priority=TaskPriority.LOW, tags=["planning"]))
    s.create(
        make_draft(
            title="Fix login bug",
            description="Users get logged out",
            assignee="Taro Tanaka",
            assignee_id=1,
            project_id=1,
            status=TaskStatus.REVIEW,
            priority=TaskPriority.URGENT,
            start_date=date(2024, 1, 3),
            due_date=date(2024, 1, 5),
            tags=["bug", "auth"],
        )
    )
    s.create(
        make_draft(
            title="Label racks",
            assignee="Ichiro Suzuki",
            project_id=2,
            status=TaskStatus.IN_PROGRESS,
            start_date=None,
            due_date=date(2024, 1, 10),
            progress=40,
        )
    )
    return s


@pytest.fixture()
def hub(store: TaskStore) -> ProjectionHub:
    return ProjectionHub(store)


@pytest.fixture()
def router(store: TaskStore, hub: ProjectionHub) -> MutationRouter:
    return MutationRouter(store, hub)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired the same way as the real shell, around the test store."""
    return create_initial_state(settings=settings, store=store)
