# src/taskviews/tasks/demo_data.py

# Sample directory and task data used when no snapshot file exists yet.

from __future__ import annotations

from datetime import UTC, date, datetime

from ..core.directory import Project, User
from .task_models import Task, TaskPriority, TaskStatus

DEMO_PROJECTS: tuple[Project, ...] = (
    Project(
        id=1,
        name="Material system upgrade",
        status="active",
        description="Extend the leftover-material system and polish the UI",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 8, 31),
        manager="Taro Tanaka",
        members=("Taro Tanaka", "Hanako Sato", "Jiro Yamada"),
    ),
    Project(
        id=2,
        name="Warehouse layout",
        status="active",
        description="Rearrange storage and shorten picking routes",
        start_date=date(2025, 6, 15),
        end_date=date(2025, 9, 30),
        manager="Hanako Sato",
        members=("Hanako Sato", "Ichiro Suzuki", "Misaki Takahashi"),
    ),
    Project(
        id=3,
        name="Inventory audit",
        status="planning",
        description="Digitize the periodic stock audit",
        start_date=date(2025, 7, 1),
        end_date=date(2025, 10, 31),
        manager="Jiro Yamada",
        members=("Jiro Yamada", "Taro Tanaka"),
    ),
)

DEMO_USERS: tuple[User, ...] = (
    User(id=1, name="Taro Tanaka", role="admin"),
    User(id=2, name="Hanako Sato"),
    User(id=3, name="Jiro Yamada"),
    User(id=4, name="Ichiro Suzuki"),
    User(id=5, name="Misaki Takahashi"),
)


def _ts(raw: str) -> datetime:
    return datetime.fromisoformat(raw).replace(tzinfo=UTC)


def demo_tasks() -> list[Task]:
    return [
        Task(
            id=1,
            title="Design task management",
            description="Detailed design and database schema for task management",
            project_id=1,
            assignee="Taro Tanaka",
            assignee_id=1,
            status=TaskStatus.DONE,
            priority=TaskPriority.HIGH,
            start_date=date(2025, 6, 1),
            due_date=date(2025, 6, 10),
            completed_date=date(2025, 6, 9),
            estimated_hours=16,
            actual_hours=14,
            progress=100,
            tags=["design", "database"],
            created_by="Taro Tanaka",
            created_at=_ts("2025-06-01T09:00:00"),
            updated_at=_ts("2025-06-09T17:30:00"),
        ),
        Task(
            id=2,
            title="Build the kanban board",
            description="Board screen with drag and drop between columns",
            project_id=1,
            assignee="Hanako Sato",
            assignee_id=2,
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            start_date=date(2025, 6, 11),
            due_date=date(2025, 6, 25),
            estimated_hours=24,
            actual_hours=12,
            progress=50,
            dependencies=[1],
            tags=["frontend", "ui"],
            created_by="Taro Tanaka",
            created_at=_ts("2025-06-05T10:00:00"),
            updated_at=_ts("2025-06-20T15:45:00"),
        ),
        Task(
            id=3,
            title="Gantt chart view",
            description="Timeline with dependency arrows and bar resizing",
            project_id=1,
            assignee="Jiro Yamada",
            assignee_id=3,
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            start_date=date(2025, 6, 26),
            due_date=date(2025, 7, 10),
            estimated_hours=20,
            dependencies=[2],
            tags=["frontend", "chart"],
            created_by="Taro Tanaka",
            created_at=_ts("2025-06-05T10:30:00"),
            updated_at=_ts("2025-06-05T10:30:00"),
        ),
        Task(
            id=4,
            title="Survey current layout",
            description="Measure aisles and record every storage location",
            project_id=2,
            assignee="Ichiro Suzuki",
            assignee_id=4,
            status=TaskStatus.REVIEW,
            priority=TaskPriority.URGENT,
            start_date=date(2025, 6, 15),
            due_date=date(2025, 6, 30),
            estimated_hours=30,
            actual_hours=28,
            progress=90,
            tags=["survey", "warehouse"],
            created_by="Hanako Sato",
            created_at=_ts("2025-06-10T08:00:00"),
            updated_at=_ts("2025-06-28T16:00:00"),
        ),
        Task(
            id=5,
            title="Picking route simulation",
            description="Compare travel distance for the proposed layouts",
            project_id=2,
            assignee="Misaki Takahashi",
            assignee_id=5,
            status=TaskStatus.TODO,
            priority=TaskPriority.LOW,
            start_date=date(2025, 7, 1),
            due_date=date(2025, 7, 20),
            estimated_hours=35,
            dependencies=[4],
            tags=["analysis", "warehouse"],
            created_by="Hanako Sato",
            created_at=_ts("2025-06-12T13:00:00"),
            updated_at=_ts("2025-06-12T13:00:00"),
        ),
        Task(
            id=6,
            title="Audit checklist",
            description="Define the checklist used by the stock audit team",
            project_id=3,
            assignee="Jiro Yamada",
            assignee_id=3,
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            start_date=date(2025, 7, 1),
            due_date=date(2025, 7, 15),
            estimated_hours=8,
            tags=["audit"],
            created_by="Jiro Yamada",
            created_at=_ts("2025-06-20T09:00:00"),
            updated_at=_ts("2025-06-20T09:00:00"),
        ),
    ]
