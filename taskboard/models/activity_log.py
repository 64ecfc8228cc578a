"""
ActivityLog ORM model.

Append-only. project_id and entity_id are plain ids rather than foreign
keys so that entries survive deletion of what they describe.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, JSONType, TimestampMixin, UUIDMixin, enum_type

if TYPE_CHECKING:
    from taskboard.models.user import User


class ActivityAction(str, enum.Enum):
    create = "create"
    update = "update"
    delete = "delete"
    comment = "comment"
    assign = "assign"
    status_change = "status-change"


class EntityType(str, enum.Enum):
    project = "project"
    task = "task"
    comment = "comment"
    user = "user"


class ActivityLog(Base, UUIDMixin, TimestampMixin):
    """Immutable audit record describing one mutation."""

    __tablename__ = "activity_log"
    __table_args__ = (
        Index("idx_activity_log_project_created", "project_id", "created_at"),
        Index("idx_activity_log_user_created", "user_id", "created_at"),
    )

    action: Mapped[ActivityAction] = mapped_column(
        enum_type(ActivityAction, "activity_action"), nullable=False
    )
    entity_type: Mapped[EntityType] = mapped_column(
        enum_type(EntityType, "activity_entity_type"), nullable=False
    )
    entity_id: Mapped[UUID] = mapped_column(nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    old_values: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    new_values: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[UUID | None] = mapped_column(nullable=True)

    # Relationships
    user: Mapped[User] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return (
            f"<ActivityLog id={self.id} action={self.action.value!r} "
            f"entity={self.entity_type.value}:{self.entity_id}>"
        )
