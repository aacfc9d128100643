# src/taskviews/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import Any, cast

from ..core.errors import TaskError
from ..core.state import AppState
from ..tasks.task_api import create_task, duplicate_task
from ..tasks.task_filter import DateRange, TaskFilter
from ..tasks.task_sort import SortKey, SortOrder
from ..views.base import GestureResult
from ..views.board import BoardAdapter
from ..views.table import TableAdapter
from ..views.timeline import TimelineAdapter

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console shell (/help, /move, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing helpers ----

def _parse_date(raw: str) -> date:
    return date.fromisoformat(raw)


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _split(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


def _parse_field_value(field_name: str, raw: str) -> Any:
    """Turn the text typed after `field=` into the value the store expects."""
    if field_name == "progress":
        return int(raw)
    if field_name in ("estimated_hours", "actual_hours"):
        return float(raw)
    if field_name in ("project_id", "assignee_id"):
        return None if raw.lower() in ("", "none", "-") else int(raw)
    if field_name == "dependencies":
        return [int(p) for p in _split(raw)]
    if field_name == "tags":
        return _split(raw)
    if field_name.endswith("_date"):
        return None if raw.lower() in ("", "none", "-") else raw
    return raw


def _join_values(args: list[str]) -> list[str]:
    """Glue words without `=` onto the previous `key=value` (multi-word names, searches)."""
    out: list[str] = []
    for arg in args:
        if out and "=" not in arg:
            out[-1] = f"{out[-1]} {arg}"
        else:
            out.append(arg)
    return out


def _assignee_id(state: AppState, raw: str) -> int:
    """User id from `assignee=<id>` or `assignee=<name>` (looked up in the user directory)."""
    uid = _parse_int(raw)
    if uid is not None:
        return uid
    user = state.users.find_by_name(raw)
    if user is None:
        raise ValueError(f"unknown user: {raw}")
    return user.id


def _report(result: GestureResult, ok_text: str) -> str:
    if result.ok:
        return ok_text if result.task is not None else "Nothing to change."
    return f"Rejected: {result.message}"


# ---- handlers ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_view(state: AppState, args: list[str]) -> str:
    """
    /view            -> show the active view
    /view <name>     -> switch to board | table | timeline | calendar
    """
    if not args:
        return f"Active view: {state.active_view}. Views: {', '.join(state.views)}."
    name = args[0].lower()
    if name not in state.views:
        return f"Unknown view: {name}. Views: {', '.join(state.views)}."
    state.active_view = name
    return f"Switched to {name} view."


def cmd_scope(state: AppState, args: list[str]) -> str:
    """
    /scope           -> show current project scope
    /scope <id>      -> restrict every view to one project
    /scope <name>    -> same, by project name
    /scope all       -> drop the restriction
    """
    if not args:
        pid = state.hub.scope_project_id
        if pid is None:
            return "Scope: all projects."
        project = state.projects.get_project(pid)
        return f"Scope: project {pid}" + (f" ({project.name})." if project else ".")

    if args[0].lower() in ("all", "none", "-"):
        state.hub.set_scope(None)
        return "Scope cleared: all projects."

    pid = _parse_int(args[0])
    if pid is not None:
        project = state.projects.get_project(pid)
    else:
        project = state.projects.find_by_name(" ".join(args))
    if project is None:
        return f"Unknown project: {' '.join(args)}."
    state.hub.set_scope(project.id)
    return f"Scope set to project {project.id}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter clear
    /filter status=todo,review priority=high tag=ui assignee=2 search=text due=2025-06-01..2025-06-30
    assignee takes a user id or a user name (/filter assignee=Taro Tanaka).
    Applies to the active view only.
    """
    if not args or args[0].lower() == "clear":
        state.view.set_filter(TaskFilter())
        return f"Filter cleared on {state.active_view} view."

    opts: dict[str, Any] = {}
    try:
        for arg in _join_values(args):
            key, _, value = arg.partition("=")
            key = key.lower()
            if key == "status":
                opts["statuses"] = _split(value)
            elif key == "priority":
                opts["priorities"] = _split(value)
            elif key in ("tag", "tags"):
                opts["tags"] = _split(value)
            elif key == "assignee":
                opts["assignee_id"] = _assignee_id(state, value)
            elif key == "search":
                opts["search"] = value
            elif key == "due":
                start, _, end = value.partition("..")
                opts["due_range"] = DateRange(
                    _parse_date(start) if start else None,
                    _parse_date(end) if end else None,
                )
            else:
                return f"Unknown filter key: {key}."
        spec = TaskFilter.of(**opts)
    except ValueError as e:
        return f"Bad filter: {e}"

    state.view.set_filter(spec)
    return f"Filter applied on {state.active_view} view: {len(state.view.tasks)} tasks."


def cmd_sort(state: AppState, args: list[str]) -> str:
    """/sort <dueDate|priority|created|updated> [asc|desc]"""
    if not args:
        cfg = state.view.config
        return f"Sorted by {cfg.sort_by.value} {cfg.sort_order.value}."
    try:
        key = SortKey(args[0])
        order = SortOrder(args[1].lower()) if len(args) > 1 else SortOrder.ASC
    except ValueError:
        return "Usage: /sort <dueDate|priority|created|updated> [asc|desc]"
    state.view.set_sort(key, order)
    return f"Sorted {state.active_view} view by {key.value} {order.value}."


def cmd_move(state: AppState, args: list[str]) -> str:
    """/move <id> <status> -> board drop"""
    if len(args) != 2 or _parse_int(args[0]) is None:
        return "Usage: /move <id> <todo|in-progress|review|done>"
    task_id = int(args[0])
    board = cast(BoardAdapter, state.views["board"])
    board.begin_drag(task_id)
    result = board.drop(task_id, args[1].lower())
    return _report(result, f"Task {task_id} moved to {args[1].lower()}.")


def cmd_dates(state: AppState, args: list[str]) -> str:
    """/dates <id> <start> <due> -> timeline bar move"""
    if len(args) != 3 or _parse_int(args[0]) is None:
        return "Usage: /dates <id> <YYYY-MM-DD> <YYYY-MM-DD>"
    task_id = int(args[0])
    try:
        start, due = _parse_date(args[1]), _parse_date(args[2])
    except ValueError as e:
        return f"Bad date: {e}"
    timeline = cast(TimelineAdapter, state.views["timeline"])
    result = timeline.move_bar(task_id, start, due)
    return _report(result, f"Task {task_id} scheduled {start} .. {due}.")


def cmd_progress(state: AppState, args: list[str]) -> str:
    """/progress <id> <0-100> -> table inline edit"""
    if len(args) != 2 or _parse_int(args[0]) is None or _parse_int(args[1]) is None:
        return "Usage: /progress <id> <0-100>"
    task_id, value = int(args[0]), int(args[1])
    table = cast(TableAdapter, state.views["table"])
    result = table.edit_progress(task_id, value)
    return _report(result, f"Task {task_id} progress set to {value}%.")


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> <field>=<value> -> table cell edit"""
    if len(args) < 2 or _parse_int(args[0]) is None or "=" not in args[1]:
        return "Usage: /edit <id> <field>=<value>"
    task_id = int(args[0])
    field_name, _, raw = " ".join(args[1:]).partition("=")
    field_name = field_name.strip()
    try:
        value = _parse_field_value(field_name, raw.strip())
    except ValueError as e:
        return f"Bad value for {field_name}: {e}"
    table = cast(TableAdapter, state.views["table"])
    result = table.edit_cell(task_id, field_name, value)
    return _report(result, f"Task {task_id} {field_name} updated.")


def cmd_new(state: AppState, args: list[str]) -> str:
    """/new <title> | <assignee> | <due YYYY-MM-DD> [| <project id>]"""
    parts = [p.strip() for p in " ".join(args).split("|")]
    if len(parts) < 3:
        return "Usage: /new <title> | <assignee> | <YYYY-MM-DD> [| <project id>]"
    try:
        due = _parse_date(parts[2]) if parts[2] else None
        project_id = int(parts[3]) if len(parts) > 3 and parts[3] else None
        task = create_task(state, title=parts[0], assignee=parts[1], due_date=due, project_id=project_id)
    except TaskError as e:
        return f"Rejected: {e.message}"
    except ValueError as e:
        return f"Bad value: {e}"
    return f"Created task {task.id}: {task.title}."


def cmd_dup(state: AppState, args: list[str]) -> str:
    if len(args) != 1 or _parse_int(args[0]) is None:
        return "Usage: /dup <id>"
    try:
        task = duplicate_task(state, int(args[0]))
    except TaskError as e:
        return f"Rejected: {e.message}"
    return f"Created task {task.id}: {task.title}."


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1 or _parse_int(args[0]) is None:
        return "Usage: /show <id>"
    try:
        t = state.store.get(int(args[0]))
    except TaskError as e:
        return e.message
    project = state.projects.get_project(t.project_id) if t.project_id is not None else None
    return "\n".join(
        [
            f"#{t.id} {t.title}",
            f"  project:  {project.name if project else 'Unassigned'}",
            f"  assignee: {t.assignee}",
            f"  status:   {t.status.value}   priority: {t.priority.value}   progress: {t.progress}%",
            f"  dates:    {t.start_date or '-'} .. {t.due_date or '-'}",
            f"  tags:     {', '.join(t.tags) or '-'}",
            f"  depends:  {', '.join(str(d) for d in t.dependencies) or '-'}",
            f"  updated:  {t.updated_at.isoformat(timespec='seconds')}",
        ]
    )


def cmd_page(state: AppState, args: list[str]) -> str:
    """/page <n> -> table page (1-based)"""
    table = cast(TableAdapter, state.views["table"])
    if not args or _parse_int(args[0]) is None:
        return f"Page {table.model.page_index + 1}/{table.model.page_count}."
    table.set_page(int(args[0]) - 1)
    return f"Page {table.model.page_index + 1}/{table.model.page_count}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("view", cmd_view, help_text="Switch view: /view board|table|timeline|calendar.")
registry.register("scope", cmd_scope, help_text="Project scope: /scope <id> | /scope all.")
registry.register("filter", cmd_filter, help_text="Filter active view: /filter status=.. | clear.")
registry.register("sort", cmd_sort, help_text="Sort active view: /sort <key> [asc|desc].")
registry.register("move", cmd_move, help_text="Move task to a status: /move <id> <status>.")
registry.register("dates", cmd_dates, help_text="Reschedule: /dates <id> <start> <due>.")
registry.register("progress", cmd_progress, help_text="Set progress: /progress <id> <0-100>.")
registry.register("edit", cmd_edit, help_text="Edit a field: /edit <id> <field>=<value>.")
registry.register("new", cmd_new, help_text="Create: /new <title> | <assignee> | <due>.")
registry.register("dup", cmd_dup, help_text="Duplicate a task: /dup <id>.")
registry.register("show", cmd_show, help_text="Show task details: /show <id>.")
registry.register("page", cmd_page, help_text="Table page: /page <n>.")
