"""
Entity lookups shared by the resource services.

Each loader re-reads the row (populate_existing) so relationships reflect
the latest committed state, and raises NotFoundError when the id does not
resolve.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import NotFoundError
from taskboard.models.comment import Comment
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User


async def get_project_or_404(db: AsyncSession, project_id: UUID) -> Project:
    project = await db.scalar(
        select(Project)
        .where(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    if project is None:
        raise NotFoundError("Project not found", code="PROJECT_NOT_FOUND")
    return project


async def get_task_or_404(db: AsyncSession, task_id: UUID) -> Task:
    task = await db.scalar(
        select(Task)
        .where(Task.id == task_id)
        .execution_options(populate_existing=True)
    )
    if task is None:
        raise NotFoundError("Task not found", code="TASK_NOT_FOUND")
    return task


async def get_comment_or_404(db: AsyncSession, comment_id: UUID) -> Comment:
    comment = await db.scalar(
        select(Comment)
        .where(Comment.id == comment_id)
        .execution_options(populate_existing=True)
    )
    if comment is None:
        raise NotFoundError("Comment not found", code="COMMENT_NOT_FOUND")
    return comment


async def get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await db.scalar(select(User).where(User.id == user_id))
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return user


def accessible_project_ids(user_id: UUID) -> Select[tuple[UUID]]:
    """Subquery of ids of projects the user manages or belongs to."""
    return select(Project.id).where(
        or_(
            Project.manager_id == user_id,
            Project.members.any(User.id == user_id),
        )
    )
