# src/taskviews/tasks/task_sort.py

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any

from .task_models import Task


class SortKey(StrEnum):
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    CREATED = "created"
    UPDATED = "updated"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


# One key function per sort key. None means "no value" and sorts last.
SORT_KEYS: dict[SortKey, Callable[[Task], Any]] = {
    SortKey.DUE_DATE: lambda t: t.due_date,
    SortKey.PRIORITY: lambda t: t.priority.rank,
    SortKey.CREATED: lambda t: t.created_at,
    SortKey.UPDATED: lambda t: t.updated_at,
}


def sort_tasks(
    tasks: Iterable[Task],
    sort_by: SortKey | str = SortKey.DUE_DATE,
    order: SortOrder | str = SortOrder.ASC,
) -> list[Task]:
    """
    Stable sort by one key.

    Equal keys keep their input order in both directions: descending uses
    sorted(reverse=True), which preserves the relative order of equal items.
    Tasks without a value for the key are appended after the sorted ones.
    """
    key_fn = SORT_KEYS[SortKey(sort_by)]
    descending = SortOrder(order) is SortOrder.DESC

    keyed: list[Task] = []
    missing: list[Task] = []
    for task in tasks:
        (missing if key_fn(task) is None else keyed).append(task)

    return sorted(keyed, key=key_fn, reverse=descending) + missing
