# tests/test_bootstrap.py

from __future__ import annotations

import json
from datetime import date

import pytest

from taskviews.cli.bootstrap import create_initial_state, load_tasks_snapshot, save_tasks_snapshot, shutdown
from taskviews.config import Settings
from taskviews.core.errors import NotFoundError
from taskviews.tasks.task_api import create_task, duplicate_task
from taskviews.tasks.task_models import TaskStatus

from .fakes import RecordingListener


def test_empty_state_without_snapshot_or_demo(settings) -> None:
    state = create_initial_state(settings=settings)
    assert state.store.count_tasks() == 0
    assert set(state.views) == {"board", "table", "timeline", "calendar"}
    assert state.view is state.views["board"]


def test_demo_seed(settings) -> None:
    settings.seed_demo_data = True
    state = create_initial_state(settings=settings)
    assert state.store.count_tasks() > 0
    assert len(state.projects.list_projects()) == 3


def test_snapshot_roundtrip(state, settings) -> None:
    state.views["board"].drop(1, "done")
    shutdown(state)

    raw = json.loads(settings.tasks_path.read_text("utf-8"))
    assert [t["id"] for t in raw] == [1, 2, 3]

    loaded = create_initial_state(settings=settings)
    assert [t.to_dict() for t in loaded.store.get_all()] == [t.to_dict() for t in state.store.get_all()]
    assert loaded.store.get(1).status is TaskStatus.DONE


def test_snapshot_not_written_when_disabled(state, settings) -> None:
    settings.save_tasks = False
    save_tasks_snapshot(state)
    assert not settings.tasks_path.exists()


def test_bad_snapshot_is_ignored(tmp_path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{not json", "utf-8")
    assert load_tasks_snapshot(path) is None

    path.write_text(json.dumps({"id": 1}), "utf-8")
    assert load_tasks_snapshot(path) is None

    assert load_tasks_snapshot(tmp_path / "missing.json") is None


def test_invalid_snapshot_records_are_skipped(store, settings) -> None:
    good = store.get(1).to_dict()
    inverted = dict(store.get(2).to_dict(), start_date="2024-02-01", due_date="2024-01-01")
    undated = dict(store.get(3).to_dict(), due_date=None)
    no_stamps = {"id": 9, "title": "x", "assignee": "y", "due_date": "2024-01-01"}
    duplicate = dict(good, title="Second copy")
    settings.tasks_path.write_text(
        json.dumps([good, inverted, undated, no_stamps, duplicate, "junk"]), "utf-8"
    )

    assert [t.id for t in load_tasks_snapshot(settings.tasks_path)] == [1]

    state = create_initial_state(settings=settings)
    assert [t.id for t in state.store.get_all()] == [1]
    assert state.store.get(1).title == "Plan sprint"
    assert state.views["board"].card_ids("todo") == [1]


def test_create_task_defaults_to_scope(state) -> None:
    listener = RecordingListener()
    state.hub.subscribe(listener)
    state.hub.set_scope(2)

    task = create_task(state, title="Sweep aisle", assignee="Misaki Takahashi", due_date=date(2024, 1, 20))
    assert task.project_id == 2
    assert listener.calls == 2  # scope change + creation
    assert [t.id for t in state.views["table"].tasks] == [3, task.id]


def test_duplicate_task_resets_progress(state) -> None:
    state.views["board"].drop(2, "done")
    copy = duplicate_task(state, 2)
    src = state.store.get(2)

    assert copy.id == 4
    assert copy.title == "Fix login bug (copy)"
    assert copy.status is TaskStatus.TODO
    assert copy.progress == 0
    assert copy.tags == src.tags
    assert (copy.start_date, copy.due_date) == (src.start_date, src.due_date)

    with pytest.raises(NotFoundError):
        duplicate_task(state, 99)


def test_settings_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TASKVIEWS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKVIEWS_DEFAULT_VIEW", "gantt")
    monkeypatch.setenv("TASKVIEWS_SORT_ORDER", "desc")
    monkeypatch.setenv("TASKVIEWS_TABLE_PAGE_SIZE", "zero")
    monkeypatch.setenv("TASKVIEWS_SEED_DEMO_DATA", "no")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.tasks_path == tmp_path / "tasks.json"
    assert s.default_view == "board"
    assert s.default_sort_order == "desc"
    assert s.table_page_size == 20
    assert s.seed_demo_data is False


def test_create_task_links_known_assignee(state) -> None:
    known = create_task(state, title="Count bolts", assignee="jiro yamada", due_date=date(2024, 1, 15))
    stranger = create_task(state, title="Visit site", assignee="Guest", due_date=date(2024, 1, 15))
    explicit = create_task(
        state, title="Pack", assignee="Taro Tanaka", due_date=date(2024, 1, 15), assignee_id=None
    )

    assert known.assignee_id == 3
    assert stranger.assignee_id is None
    assert explicit.assignee_id is None
