"""
Comment ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, JSONType, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskboard.models.user import User


class Comment(Base, UUIDMixin, TimestampMixin):
    """A comment on a task."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    task_id: Mapped[UUID] = mapped_column(
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # [{"filename": ..., "url": ..., "mimetype": ...}]
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    # Relationships
    user: Mapped[User] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Comment id={self.id} task_id={self.task_id} user_id={self.user_id}>"
