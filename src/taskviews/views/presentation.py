# src/taskviews/views/presentation.py

# Label / color lookups keyed by enum. Adding a status or priority means adding a row here.

from __future__ import annotations

from ..tasks.task_models import TaskPriority, TaskStatus

STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.REVIEW: "Review",
    TaskStatus.DONE: "Done",
}

STATUS_COLORS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "#9CA3AF",
    TaskStatus.IN_PROGRESS: "#3B82F6",
    TaskStatus.REVIEW: "#F59E0B",
    TaskStatus.DONE: "#10B981",
}

# Lighter tones used as calendar event backgrounds.
STATUS_BACKGROUNDS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "#F3F4F6",
    TaskStatus.IN_PROGRESS: "#DBEAFE",
    TaskStatus.REVIEW: "#FEF3C7",
    TaskStatus.DONE: "#D1FAE5",
}

PRIORITY_LABELS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
    TaskPriority.URGENT: "Urgent",
}

PRIORITY_COLORS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "#16A34A",
    TaskPriority.MEDIUM: "#D97706",
    TaskPriority.HIGH: "#EA580C",
    TaskPriority.URGENT: "#DC2626",
}

UNASSIGNED_PROJECT = "Unassigned"
