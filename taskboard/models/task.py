"""
Task ORM model.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, JSONType, TimestampMixin, UUIDMixin, enum_type

if TYPE_CHECKING:
    from taskboard.models.project import Project
    from taskboard.models.user import User


class TaskStatus(str, enum.Enum):
    todo = "todo"
    in_progress = "in-progress"
    review = "review"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class Task(Base, UUIDMixin, TimestampMixin):
    """A work item within a project."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    assigned_to_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[TaskStatus] = mapped_column(
        enum_type(TaskStatus, "task_status"),
        nullable=False,
        default=TaskStatus.todo,
        index=True,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        enum_type(TaskPriority, "task_priority"),
        nullable=False,
        default=TaskPriority.medium,
    )
    due_date: Mapped[datetime | None] = mapped_column(nullable=True, index=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    estimated_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    project: Mapped[Project] = relationship("Project", back_populates="tasks", lazy="selectin")
    assigned_to: Mapped[User | None] = relationship(
        "User", foreign_keys=[assigned_to_id], lazy="selectin"
    )
    created_by: Mapped[User] = relationship(
        "User", foreign_keys=[created_by_id], lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} project_id={self.project_id}>"
