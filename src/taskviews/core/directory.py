# src/taskviews/core/directory.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, slots=True)
class Project:
    id: int
    name: str
    status: str = "active"  # planning | active | completed | archived
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    manager: str = ""
    members: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    role: str = "worker"  # admin | worker


class InMemoryProjectDirectory:
    """Fixed, ordered project list handed over by the hosting shell."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects = list(projects)

    def list_projects(self) -> list[Project]:
        return list(self._projects)

    def get_project(self, project_id: int) -> Project | None:
        for p in self._projects:
            if p.id == project_id:
                return p
        return None

    def find_by_name(self, name: str) -> Project | None:
        needle = name.strip().lower()
        for p in self._projects:
            if p.name.lower() == needle:
                return p
        return None


class InMemoryUserDirectory:
    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users = list(users)

    def list_users(self) -> list[User]:
        return list(self._users)

    def get_user(self, user_id: int) -> User | None:
        for u in self._users:
            if u.id == user_id:
                return u
        return None

    def find_by_name(self, name: str) -> User | None:
        needle = name.strip().lower()
        for u in self._users:
            if u.name.lower() == needle:
                return u
        return None
