# src/taskviews/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..views.board import BoardModel
from ..views.calendar import CalendarModel
from ..views.table import TableModel
from ..views.timeline import TimelineModel

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def render_board(model: BoardModel) -> str:
    lines: list[str] = []
    for col in model.values():
        lines.append(f"== {col.title.upper()} ({len(col.cards)})")
        if not col.cards:
            lines.append("   (empty)")
        for c in col.cards:
            tags = ""
            if c.tags:
                more = f" +{c.hidden_tags}" if c.hidden_tags else ""
                tags = f" [{', '.join(c.tags)}{more}]"
            lines.append(
                f"   #{c.task_id} {c.title} - {c.assignee}, {c.priority.value}, "
                f"due {c.due_date}, {c.progress}%{tags}"
            )
    return "\n".join(lines)


def render_table(model: TableModel) -> str:
    lines = [f"{'ID':>4}  {'STATUS':<12} {'PRIO':<7} {'DUE':<10} {'PROG':>4}  TITLE / PROJECT / ASSIGNEE"]
    for r in model.page_rows:
        lines.append(
            f"{r.task_id:>4}  {r.status_label:<12} {r.priority_label:<7} {str(r.due_date):<10} "
            f"{r.progress:>3}%  {r.title} / {r.project} / {r.assignee}"
        )
    lines.append(f"page {model.page_index + 1}/{model.page_count}, {len(model.rows)} rows")
    return "\n".join(lines)


def render_timeline(model: TimelineModel) -> str:
    span = model.span
    if span is None:
        return "(no scheduled tasks)"
    first, last = span
    width = max(1, (last - first).days + 1)
    scale = max(1, width // 60 + 1)  # days per character
    lines = [f"{first} .. {last} ({model.scale.value} scale)"]
    for b in model.bars:
        offset = (b.start - first).days // scale
        length = max(1, ((b.end - b.start).days + 1) // scale)
        done = round(length * b.progress / 100)
        bar = "#" * done + "=" * (length - done)
        deps = f" <- {','.join(str(d) for d in b.dependencies)}" if b.dependencies else ""
        lines.append(f"{b.task_id:>4} {' ' * offset}{bar} {b.name}{deps}")
    return "\n".join(lines)


def render_calendar(model: CalendarModel) -> str:
    if not model:
        return "(no events)"
    lines: list[str] = []
    for e in sorted(model, key=lambda ev: ev.start):
        lines.append(f"{e.start} -> {e.end} (excl)  #{e.task_id} {e.title} [{e.status.value}]")
    return "\n".join(lines)


RENDERERS: dict[str, Callable[[Any], str]] = {
    "board": render_board,
    "table": render_table,
    "timeline": render_timeline,
    "calendar": render_calendar,
}


def render_active_view(state: AppState) -> str:
    return RENDERERS[state.active_view](state.view.model)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (view=%s).", state.active_view)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")
    print(render_active_view(state))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(f"{state.active_view}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command failed: %s", user_input)
            _print_ts("[ERROR] Command failed, see log for details.")
            continue

        if reply is None:
            reply = "Not a command. Use /help to list available commands."
        _print_ts(reply)
        print(render_active_view(state))
