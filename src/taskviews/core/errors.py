# src/taskviews/core/errors.py

"""
Errors raised by the task core.

Every error is local and recoverable: it goes back to whoever issued the
operation (a form, an adapter gesture) and is never broadcast to other views.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for task core errors."""

    def __init__(self, message: str, *, task_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.task_id = task_id


class ValidationError(TaskError, ValueError):
    """Required field missing, unknown field, or value not in its enum."""


class NotFoundError(TaskError, LookupError):
    """The referenced task id is not in the store."""


class InvalidRangeError(TaskError, ValueError):
    """Start date after due date."""


class OutOfRangeError(TaskError, ValueError):
    """Progress outside [0, 100]."""
