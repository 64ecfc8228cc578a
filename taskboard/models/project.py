"""
Project ORM model and the project_members association table.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, TimestampMixin, UUIDMixin, enum_type

if TYPE_CHECKING:
    from taskboard.models.task import Task
    from taskboard.models.user import User


class ProjectStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    on_hold = "on-hold"
    cancelled = "cancelled"


DEFAULT_PROJECT_COLOR = "#3B82F6"


project_members = Table(
    "project_members",
    Base.metadata,
    Column(
        "project_id",
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Project(Base, UUIDMixin, TimestampMixin):
    """A project owned by a manager, with a set of member users."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    manager_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[ProjectStatus] = mapped_column(
        enum_type(ProjectStatus, "project_status"),
        nullable=False,
        default=ProjectStatus.active,
    )
    start_date: Mapped[datetime | None] = mapped_column(nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_PROJECT_COLOR)

    # Relationships
    manager: Mapped[User] = relationship("User", lazy="selectin")
    members: Mapped[list[User]] = relationship(
        "User",
        secondary=project_members,
        lazy="selectin",
        order_by="User.created_at",
    )
    tasks: Mapped[list[Task]] = relationship(
        "Task",
        back_populates="project",
        passive_deletes=True,
    )

    @property
    def member_ids(self) -> set[UUID]:
        return {member.id for member in self.members}

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} manager_id={self.manager_id}>"
