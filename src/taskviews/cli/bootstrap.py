# src/taskviews/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds one TaskStore and injects it into the hub, the router and the views,
- loads / saves the task snapshot as JSON (best-effort).
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..config import get_settings
from ..core.directory import InMemoryProjectDirectory, InMemoryUserDirectory
from ..core.errors import TaskError
from ..core.state import AppState
from ..tasks.demo_data import DEMO_PROJECTS, DEMO_USERS, demo_tasks
from ..tasks.task_models import Task
from ..tasks.task_mutations import MutationRouter
from ..tasks.task_projection import ProjectionHub, ViewConfig
from ..tasks.task_sort import SortKey, SortOrder
from ..tasks.task_store import TaskStore
from ..views.base import ViewAdapter
from ..views.board import BoardAdapter
from ..views.calendar import CalendarAdapter
from ..views.table import TableAdapter
from ..views.timeline import TimelineAdapter

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def _snapshot_record(raw: dict[str, Any]) -> Task | None:
    """One snapshot entry as a valid Task, or None (logged) if it cannot be stored."""
    try:
        task = Task.from_dict(raw)
        TaskStore.check_task(task)
    except (TaskError, KeyError, TypeError, ValueError) as e:
        logger.warning("Skipping task snapshot record id=%r: %s", raw.get("id"), e)
        return None
    return task


def load_tasks_snapshot(path: Path) -> list[Task] | None:
    """
    Read tasks from a JSON snapshot. None means "no usable snapshot".

    Records that would break a store invariant are skipped one by one, so a
    single bad entry never blocks startup.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text("utf-8"))
    except Exception:
        logger.exception("Failed to load task snapshot from %s", path)
        return None
    if not isinstance(data, list):
        logger.warning("Task snapshot %s is not a list; ignoring it.", path)
        return None

    tasks: list[Task] = []
    seen: set[int] = set()
    for raw in data:
        if not isinstance(raw, dict):
            continue
        task = _snapshot_record(raw)
        if task is None:
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task snapshot record id=%s", task.id)
            continue
        seen.add(task.id)
        tasks.append(task)
    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return tasks


def save_tasks_snapshot(state: AppState) -> None:
    if not getattr(state.settings, "save_tasks", False):
        return
    path = Path(state.settings.tasks_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [t.to_dict() for t in state.store.get_all()]
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
        logger.info("Saved %d tasks to %s", len(payload), path)
    except Exception:
        logger.exception("Failed to save task snapshot to %s", path)


def _view_config(settings) -> ViewConfig:
    return ViewConfig(
        sort_by=SortKey(getattr(settings, "default_sort_by", "dueDate")),
        sort_order=SortOrder(getattr(settings, "default_sort_order", "asc")),
    )


def build_views(state: AppState) -> dict[str, ViewAdapter[Any]]:
    """One adapter per view, each with its own config but the same hub and router."""
    s = state.settings
    return {
        "board": BoardAdapter(state.hub, state.router, _view_config(s)),
        "table": TableAdapter(
            state.hub,
            state.router,
            _view_config(s),
            projects=state.projects,
            page_size=getattr(s, "table_page_size", 20),
        ),
        "timeline": TimelineAdapter(state.hub, state.router, _view_config(s)),
        "calendar": CalendarAdapter(state.hub, state.router, _view_config(s)),
    }


def create_initial_state(*, settings=None, store: TaskStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        tasks = load_tasks_snapshot(Path(settings.tasks_path))
        if tasks is None:
            tasks = demo_tasks() if getattr(settings, "seed_demo_data", False) else []
        store = TaskStore(tasks)

    hub = ProjectionHub(store)
    state = AppState(
        settings=settings,
        store=store,
        hub=hub,
        router=MutationRouter(store, hub),
        projects=InMemoryProjectDirectory(DEMO_PROJECTS),
        users=InMemoryUserDirectory(DEMO_USERS),
        active_view=getattr(settings, "default_view", "board"),
    )
    state.views = build_views(state)
    return state


def shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    save_tasks_snapshot(state)
    for view in state.views.values():
        with contextlib.suppress(Exception):
            view.close()
