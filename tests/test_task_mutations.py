# tests/test_task_mutations.py

from __future__ import annotations

from datetime import date

import pytest

from taskviews.core.errors import InvalidRangeError, NotFoundError, OutOfRangeError, ValidationError
from taskviews.tasks.task_filter import TaskFilter
from taskviews.tasks.task_models import TaskStatus
from taskviews.tasks.task_mutations import (
    DateMove,
    FieldEdit,
    MutationRouter,
    ProgressChange,
    StatusMove,
)
from taskviews.tasks.task_projection import ProjectionHub, ViewConfig
from taskviews.tasks.task_store import TaskStore

from .fakes import RecordingListener, make_draft


@pytest.fixture()
def listener(hub: ProjectionHub) -> RecordingListener:
    rec = RecordingListener()
    hub.subscribe(rec)
    return rec


def test_status_move_changes_only_status_and_updated_at(
    store: TaskStore, hub: ProjectionHub, router: MutationRouter, listener: RecordingListener
) -> None:
    before = store.get(1)
    assert (before.start_date, before.due_date, before.status) == (
        date(2024, 1, 1),
        date(2024, 1, 8),
        TaskStatus.TODO,
    )

    after = router.submit(StatusMove(1, TaskStatus.IN_PROGRESS))

    changed = {
        name
        for name, value in after.to_dict().items()
        if before.to_dict()[name] != value
    }
    assert changed == {"status", "updated_at"}
    assert listener.calls == 1

    in_progress = ViewConfig(filter_spec=TaskFilter.of(statuses=["in-progress"]))
    todo = ViewConfig(filter_spec=TaskFilter.of(statuses=["todo"]))
    assert 1 in [t.id for t in hub.project(in_progress)]
    assert 1 not in [t.id for t in hub.project(todo)]


def test_status_move_to_done_keeps_progress(store: TaskStore, router: MutationRouter) -> None:
    task = router.submit(StatusMove(3, "done"))
    assert task.status is TaskStatus.DONE
    assert task.progress == 40
    assert task.completed_date is None


def test_progress_is_independent_of_status(router: MutationRouter) -> None:
    task = router.submit(ProgressChange(1, 100))
    assert task.status is TaskStatus.TODO
    assert task.progress == 100


def test_rejected_date_move_keeps_dates(
    store: TaskStore, router: MutationRouter, listener: RecordingListener
) -> None:
    before = store.get(1)
    with pytest.raises(InvalidRangeError) as exc:
        router.submit(DateMove(1, new_start=date(2024, 2, 1), new_due=date(2024, 1, 1)))

    assert exc.value.task_id == 1
    after = store.get(1)
    assert (after.start_date, after.due_date) == (date(2024, 1, 1), date(2024, 1, 8))
    assert after.updated_at == before.updated_at
    assert listener.calls == 0


def test_date_move_applies_both_dates(router: MutationRouter) -> None:
    task = router.submit(DateMove(1, date(2024, 1, 2), date(2024, 1, 12)))
    assert (task.start_date, task.due_date) == (date(2024, 1, 2), date(2024, 1, 12))


def test_same_day_date_move_is_allowed(router: MutationRouter) -> None:
    task = router.submit(DateMove(1, date(2024, 1, 5), date(2024, 1, 5)))
    assert task.start_date == task.due_date


@pytest.mark.parametrize("value", [-1, 101, 250])
def test_progress_out_of_range(store: TaskStore, router: MutationRouter, value: int) -> None:
    with pytest.raises(OutOfRangeError):
        router.submit(ProgressChange(3, value))
    assert store.get(3).progress == 40


@pytest.mark.parametrize("value", [0, 100])
def test_progress_bounds_are_inclusive(router: MutationRouter, value: int) -> None:
    assert router.submit(ProgressChange(3, value)).progress == value


@pytest.mark.parametrize(
    "intent, error",
    [
        (StatusMove(1, "archived"), ValidationError),
        (ProgressChange(1, 50.5), ValidationError),
        (FieldEdit(1, {}), ValidationError),
        (FieldEdit(1, {"due_date": None}), ValidationError),
        (FieldEdit(1, {"start_date": date(2024, 3, 1)}), InvalidRangeError),
        (StatusMove(42, "done"), NotFoundError),
        (DateMove(42, date(2024, 1, 1), date(2024, 1, 2)), NotFoundError),
    ],
)
def test_rejections_do_not_notify(
    store: TaskStore, router: MutationRouter, listener: RecordingListener, intent, error
) -> None:
    snapshot = [t.to_dict() for t in store.get_all()]
    with pytest.raises(error):
        router.submit(intent)
    assert [t.to_dict() for t in store.get_all()] == snapshot
    assert listener.calls == 0


def test_field_edit_applies_all_fields_at_once(router: MutationRouter) -> None:
    task = router.submit(FieldEdit(2, {"title": "Fix session bug", "priority": "high", "tags": ["bug"]}))
    assert task.title == "Fix session bug"
    assert task.priority.value == "high"
    assert task.tags == ["bug"]


def test_dependencies_are_not_checked(router: MutationRouter) -> None:
    task = router.submit(FieldEdit(1, {"dependencies": [1, 99]}))
    assert task.dependencies == [1, 99]


def test_updated_at_moves_forward_and_created_at_stays(
    store: TaskStore, router: MutationRouter
) -> None:
    intents = [
        StatusMove(2, "done"),
        DateMove(2, date(2024, 1, 2), date(2024, 1, 6)),
        ProgressChange(2, 75),
        FieldEdit(2, {"description": "Session cookie expires early"}),
    ]
    created = store.get(2).created_at
    last = store.get(2).updated_at
    for intent in intents:
        task = router.submit(intent)
        assert task.updated_at >= last
        assert task.updated_at > last  # StepClock always advances
        assert task.created_at == created
        last = task.updated_at


def test_sequential_mutations_last_write_wins(store: TaskStore, router: MutationRouter) -> None:
    router.submit(StatusMove(1, "review"))
    router.submit(StatusMove(1, "done"))
    assert store.get(1).status is TaskStatus.DONE


def test_create_through_router_notifies(
    store: TaskStore, router: MutationRouter, listener: RecordingListener
) -> None:
    task = router.create(make_draft(title="New one", project_id=2))
    assert store.get(task.id) is task
    assert listener.calls == 1


def test_submit_rejects_non_intents(router: MutationRouter) -> None:
    with pytest.raises(TypeError):
        router.submit({"task_id": 1})  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "fields",
    [
        {"description": None},
        {"created_by": None},
        {"estimated_hours": "3"},
        {"actual_hours": None},
        {"assignee_id": "1"},
        {"project_id": "1"},
        {"project_id": True},
    ],
)
def test_wrongly_typed_field_edit_keeps_views_working(
    store: TaskStore, hub: ProjectionHub, router: MutationRouter, listener: RecordingListener, fields
) -> None:
    with pytest.raises(ValidationError):
        router.submit(FieldEdit(1, fields))
    assert listener.calls == 0

    hub.set_scope(1)
    search = ViewConfig(filter_spec=TaskFilter.of(search="sprint"))
    assert [t.id for t in hub.project(search)] == [1]
    assert [t.id for t in hub.project(ViewConfig())] == [2, 1]


def test_valid_field_edits_keep_search_and_scope_working(
    hub: ProjectionHub, router: MutationRouter
) -> None:
    router.submit(
        FieldEdit(1, {"description": "", "created_by": "", "estimated_hours": 4, "assignee_id": 2})
    )
    router.submit(FieldEdit(3, {"project_id": 1}))

    hub.set_scope(1)
    assert [t.id for t in hub.project(ViewConfig())] == [2, 1, 3]
    assert [t.id for t in hub.project(ViewConfig(filter_spec=TaskFilter.of(search="zzz")))] == []
    assert [t.id for t in hub.project(ViewConfig(filter_spec=TaskFilter.of(assignee_id=2)))] == [1]
