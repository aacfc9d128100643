# src/taskviews/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKVIEWS"

VIEW_NAMES = ("board", "table", "timeline", "calendar")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    return raw if raw in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data (ignored by git) ----
    data_dir: Path
    tasks_path: Path
    save_tasks: bool
    seed_demo_data: bool

    # ---- Console shell ----
    console_enabled: bool
    default_view: str

    # ---- View defaults ----
    default_sort_by: str
    default_sort_order: str
    table_page_size: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskviews")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskviews"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.json")
        save_tasks = _env_bool(_k("SAVE_TASKS"), True)
        seed_demo_data = _env_bool(_k("SEED_DEMO_DATA"), True)

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        default_view = _env_choice(_k("DEFAULT_VIEW"), VIEW_NAMES, "board")

        default_sort_by = _env_choice(
            _k("SORT_BY"), ("dueDate", "priority", "created", "updated"), "dueDate"
        )
        default_sort_order = _env_choice(_k("SORT_ORDER"), ("asc", "desc"), "asc")
        table_page_size = max(1, _env_int(_k("TABLE_PAGE_SIZE"), 20))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_path=tasks_path,
            save_tasks=save_tasks,
            seed_demo_data=seed_demo_data,
            console_enabled=console_enabled,
            default_view=default_view,
            default_sort_by=default_sort_by,
            default_sort_order=default_sort_order,
            table_page_size=table_page_size,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
