# src/taskviews/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
Project and user lists are owned elsewhere; the core only reads them.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

TaskChangeListener = Callable[[], None]
# "Recompute now". No payload: listeners re-derive everything from project(...).


class TaskRepo(Protocol):
    """The store behind every view. TaskStore is the in-process implementation."""

    def create(self, draft: Any) -> Any: ...
    def update(self, task_id: int, changes: Mapping[str, Any]) -> Any: ...
    def get(self, task_id: int) -> Any: ...
    def get_all(self) -> list[Any]: ...
    def count_tasks(self) -> int: ...


class ProjectDirectory(Protocol):
    """Read-only list of projects, used for scope selection and display names."""

    def list_projects(self) -> list[Any]: ...
    def get_project(self, project_id: int) -> Any | None: ...
    def find_by_name(self, name: str) -> Any | None: ...


class UserDirectory(Protocol):
    """Read-only list of people a task can be assigned to."""

    def list_users(self) -> list[Any]: ...
    def get_user(self, user_id: int) -> Any | None: ...
    def find_by_name(self, name: str) -> Any | None: ...
