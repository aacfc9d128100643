# src/taskviews/tasks/task_filter.py

"""
Filter engine.

A TaskFilter is a bag of optional predicates. Present predicates are ANDed;
an absent one (None, empty collection, blank search) constrains nothing.
Filtering is pure and keeps the input order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date

from .task_models import Task, TaskPriority, TaskStatus


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive due-date window; either bound may be open."""

    start: date | None = None
    end: date | None = None

    def contains(self, day: date | None) -> bool:
        if day is None:
            return False
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True, slots=True)
class TaskFilter:
    assignee_id: int | None = None
    statuses: frozenset[TaskStatus] = field(default_factory=frozenset)
    priorities: frozenset[TaskPriority] = field(default_factory=frozenset)
    tags: frozenset[str] = field(default_factory=frozenset)
    due_range: DateRange | None = None
    search: str | None = None

    @classmethod
    def of(
        cls,
        *,
        assignee_id: int | None = None,
        statuses: Iterable[str] = (),
        priorities: Iterable[str] = (),
        tags: Iterable[str] = (),
        due_range: DateRange | None = None,
        search: str | None = None,
    ) -> TaskFilter:
        """Build a filter from loose values (plain strings are coerced to enums)."""
        return cls(
            assignee_id=assignee_id,
            statuses=frozenset(TaskStatus(s) for s in statuses),
            priorities=frozenset(TaskPriority(p) for p in priorities),
            tags=frozenset(tags),
            due_range=due_range,
            search=search,
        )

    def is_empty(self) -> bool:
        return not self.predicates()

    def matches(self, task: Task) -> bool:
        return all(pred(task) for pred in self.predicates())

    def predicates(self) -> list[Callable[[Task], bool]]:
        preds: list[Callable[[Task], bool]] = []

        if self.assignee_id is not None:
            preds.append(lambda t: t.assignee_id == self.assignee_id)

        if self.statuses:
            preds.append(lambda t: t.status in self.statuses)

        if self.priorities:
            preds.append(lambda t: t.priority in self.priorities)

        if self.tags:
            # any-of: a single shared tag is enough
            preds.append(lambda t: not self.tags.isdisjoint(t.tags))

        if self.due_range is not None:
            rng = self.due_range
            preds.append(lambda t: rng.contains(t.due_date))

        needle = (self.search or "").strip().lower()
        if needle:
            preds.append(
                lambda t: needle in t.title.lower()
                or needle in t.description.lower()
                or needle in t.assignee.lower()
            )

        return preds


def filter_tasks(tasks: Iterable[Task], spec: TaskFilter | None) -> list[Task]:
    if spec is None:
        return list(tasks)
    preds = spec.predicates()
    return [t for t in tasks if all(pred(t) for pred in preds)]
