# tests/test_views.py

from __future__ import annotations

from datetime import date

import pytest

from taskviews.core.errors import InvalidRangeError, ValidationError
from taskviews.core.state import AppState
from taskviews.tasks.task_filter import TaskFilter
from taskviews.tasks.task_models import TaskStatus
from taskviews.tasks.task_projection import ProjectionHub, ViewConfig
from taskviews.views.board import BoardAdapter
from taskviews.views.calendar import CalendarAdapter
from taskviews.views.table import TableAdapter
from taskviews.views.timeline import TimelineAdapter


class RejectingRouter:
    """Router double that records what the board showed mid-gesture, then fails."""

    def __init__(self, board_ref: list[BoardAdapter]) -> None:
        self.board_ref = board_ref
        self.seen: list[list[int]] = []

    def submit(self, intent):
        board = self.board_ref[0]
        self.seen.append(board.card_ids(intent.new_status))
        raise InvalidRangeError("rejected for test", task_id=intent.task_id)


# ---- propagation ----

def test_board_drop_refreshes_every_view_including_origin(state: AppState) -> None:
    before = {name: v.refresh_count for name, v in state.views.items()}
    board = state.views["board"]

    result = board.drop(1, "in-progress")

    assert result.ok and result.task is not None
    assert result.task.status is TaskStatus.IN_PROGRESS
    assert {name: v.refresh_count - before[name] for name, v in state.views.items()} == {
        "board": 1,
        "table": 1,
        "timeline": 1,
        "calendar": 1,
    }
    assert board.card_ids("todo") == []
    assert board.card_ids("in-progress") == [1, 3]
    assert state.views["table"].row(1).status is TaskStatus.IN_PROGRESS


def test_scope_change_refreshes_views(state: AppState) -> None:
    state.hub.set_scope(2)
    assert [t.id for t in state.views["table"].tasks] == [3]
    assert state.views["board"].card_ids("todo") == []


def test_filters_are_per_view(state: AppState) -> None:
    board = state.views["board"]
    table = state.views["table"]
    board.set_filter(TaskFilter.of(statuses=["review"]))

    assert [t.id for t in board.tasks] == [2]
    assert [t.id for t in table.tasks] == [2, 1, 3]


def test_closed_view_stops_refreshing(state: AppState) -> None:
    calendar = state.views["calendar"]
    calendar.close()
    count = calendar.refresh_count
    state.views["board"].drop(1, "done")
    assert calendar.refresh_count == count


# ---- board ----

def test_board_groups_by_status_in_projection_order(state: AppState) -> None:
    board = state.views["board"]
    assert board.config.group_by == "status"
    assert list(board.model) == list(TaskStatus)
    assert board.card_ids("todo") == [1]
    assert board.card_ids("review") == [2]
    assert board.column("done").title == "Done"

    board.set_sort("dueDate", "desc")
    board.drop(2, "in-progress")
    assert board.card_ids("in-progress") == [3, 2]


def test_drop_on_same_column_is_a_no_op(state: AppState) -> None:
    board = state.views["board"]
    stamp = state.store.get(1).updated_at
    count = board.refresh_count

    board.begin_drag(1)
    result = board.drop(1, TaskStatus.TODO)

    assert result.ok and result.task is None
    assert board.dragging is None
    assert board.refresh_count == count
    assert state.store.get(1).updated_at == stamp


def test_cancelled_drag_never_reaches_router(state: AppState) -> None:
    board = state.views["board"]
    stamp = state.store.get(1).updated_at
    board.begin_drag(1)
    assert board.dragging == 1

    board.cancel_drag()
    assert board.dragging is None
    assert board.card_ids("todo") == [1]
    assert state.store.get(1).updated_at == stamp


def test_invalid_drop_keeps_card_and_reports_error(state: AppState) -> None:
    board = state.views["board"]
    result = board.drop(1, "archived")

    assert not result.ok
    assert isinstance(result.error, ValidationError)
    assert board.last_error is result.error
    assert board.card_ids("todo") == [1]

    assert board.drop(1, "review").ok
    assert board.last_error is None


def test_optimistic_move_is_reverted_on_failure(hub: ProjectionHub) -> None:
    ref: list[BoardAdapter] = []
    router = RejectingRouter(ref)
    board = BoardAdapter(hub, router)  # type: ignore[arg-type]
    ref.append(board)

    result = board.drop(1, "done")

    assert router.seen == [[1]]  # card shown in the target column while in flight
    assert not result.ok
    assert result.message == "rejected for test"
    assert board.card_ids("done") == []
    assert board.card_ids("todo") == [1]


def test_board_card_shows_at_most_three_tags(state: AppState) -> None:
    state.views["table"].edit_cell(1, "tags", ["a", "b", "c", "d", "e"])
    card = state.views["board"].column("todo").cards[0]
    assert card.tags == ("a", "b", "c")
    assert card.hidden_tags == 2


# ---- table ----

def test_table_rows_and_paging(hub: ProjectionHub, router) -> None:
    table = TableAdapter(hub, router, page_size=2)
    assert table.model.page_count == 2
    assert [r.task_id for r in table.model.page_rows] == [2, 1]

    table.set_page(5)
    assert table.model.page_index == 1
    assert [r.task_id for r in table.model.page_rows] == [3]

    # page survives a refresh
    table.edit_progress(3, 60)
    assert table.model.page_index == 1
    assert table.row(3).progress == 60


def test_table_project_names(state: AppState) -> None:
    table = state.views["table"]
    assert table.row(1).project == "Material system upgrade"
    assert table.row(3).project == "Warehouse layout"

    table.edit_cell(3, "project_id", None)
    assert table.row(3).project == "Unassigned"


def test_table_cell_edit_rejected_keeps_old_value(state: AppState) -> None:
    table = state.views["table"]
    result = table.edit_cell(2, "title", "   ")
    assert not result.ok
    assert table.row(2).title == "Fix login bug"

    result = table.edit_cell(2, "title", "Fix session bug")
    assert result.ok
    assert table.row(2).title == "Fix session bug"


def test_table_status_and_progress_edits(state: AppState) -> None:
    table = state.views["table"]
    assert table.edit_status(3, "review").ok
    assert table.row(3).status_label == "Review"

    result = table.edit_progress(3, 130)
    assert not result.ok
    assert table.row(3).progress == 40


# ---- timeline ----

def test_timeline_bars(state: AppState) -> None:
    timeline = state.views["timeline"]
    bar = timeline.bar(3)
    # no start date: the bar starts on the due date
    assert (bar.start, bar.end) == (date(2024, 1, 10), date(2024, 1, 10))
    assert timeline.model.span == (date(2024, 1, 1), date(2024, 1, 10))

    timeline.set_scale("month")
    assert timeline.model.scale == "month"


def test_timeline_rejected_move_reverts_bar(state: AppState) -> None:
    timeline = state.views["timeline"]
    result = timeline.move_bar(1, date(2024, 2, 1), date(2024, 1, 1))

    assert not result.ok
    assert isinstance(result.error, InvalidRangeError)
    bar = timeline.bar(1)
    assert (bar.start, bar.end) == (date(2024, 1, 1), date(2024, 1, 8))


def test_timeline_move_updates_store(state: AppState) -> None:
    timeline = state.views["timeline"]
    assert timeline.move_bar(1, date(2024, 1, 3), date(2024, 1, 12)).ok
    task = state.store.get(1)
    assert (task.start_date, task.due_date) == (date(2024, 1, 3), date(2024, 1, 12))
    assert timeline.change_progress(1, 10).ok
    assert timeline.bar(1).progress == 10


def test_timeline_hides_dependencies_when_asked(hub: ProjectionHub, router, store) -> None:
    store.update(2, {"dependencies": [1]})
    shown = TimelineAdapter(hub, router)
    hidden = TimelineAdapter(hub, router, show_dependencies=False)
    assert shown.bar(2).dependencies == (1,)
    assert hidden.bar(2).dependencies == ()


# ---- calendar ----

def test_calendar_end_is_exclusive(state: AppState) -> None:
    calendar = state.views["calendar"]
    event = calendar.event(1)
    assert (event.start, event.end) == (date(2024, 1, 1), date(2024, 1, 9))
    assert event.covers(date(2024, 1, 8))
    assert not event.covers(date(2024, 1, 9))
    assert [e.task_id for e in calendar.events_on(date(2024, 1, 4))] == [2, 1]


def test_calendar_move_maps_exclusive_end_to_due(state: AppState) -> None:
    calendar = state.views["calendar"]
    assert calendar.move_event(1, date(2024, 1, 2), date(2024, 1, 11)).ok

    task = state.store.get(1)
    assert (task.start_date, task.due_date) == (date(2024, 1, 2), date(2024, 1, 10))
    assert calendar.event(1).end == date(2024, 1, 11)


def test_calendar_rejected_move_reverts(state: AppState) -> None:
    calendar = state.views["calendar"]
    result = calendar.move_event(1, date(2024, 1, 20), date(2024, 1, 11))
    assert not result.ok
    assert calendar.event(1).start == date(2024, 1, 1)


def test_calendar_status_toggle_is_view_local(hub: ProjectionHub, router) -> None:
    calendar = CalendarAdapter(hub, router, ViewConfig(), visible_statuses=["todo", "in-progress"])
    count = calendar.refresh_count
    assert [e.task_id for e in calendar.model] == [1, 3]

    calendar.set_visible_statuses(TaskStatus)
    assert [e.task_id for e in calendar.model] == [2, 1, 3]
    assert calendar.refresh_count == count
    assert calendar.config.filter_spec.is_empty()


@pytest.mark.parametrize("name", ["board", "table", "timeline", "calendar"])
def test_views_use_configured_sort(state: AppState, name: str) -> None:
    assert [t.id for t in state.views[name].tasks] == [2, 1, 3]
