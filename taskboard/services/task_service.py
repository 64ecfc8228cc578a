"""
Task business logic.

Handles task CRUD. A task has no ACL of its own: every check is made
against its parent project.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.permissions import require_privileged, require_project_access
from taskboard.models.activity_log import ActivityAction, EntityType
from taskboard.models.comment import Comment
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.models.user import User
from taskboard.schemas.common import ListResponse
from taskboard.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from taskboard.services.activity_service import record_activity
from taskboard.services.lookups import (
    accessible_project_ids,
    get_project_or_404,
    get_task_or_404,
    get_user_or_404,
)
from taskboard.services.pagination import paginate, parse_sort

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "title": Task.title,
    "status": Task.status,
    "priority": Task.priority,
    "dueDate": Task.due_date,
}

_REQUIRED_FIELDS = {"title", "status", "priority", "tags"}


def _snapshot(task: Task) -> dict[str, Any]:
    return TaskResponse.model_validate(task).model_dump(mode="json", by_alias=True)


class TaskService:
    """Handles all task operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # List Tasks
    # -----------------------------------------------------------------------

    async def list_tasks(
        self,
        caller: User,
        project_id: UUID | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        assigned_to: UUID | None = None,
        page: int = 1,
        limit: int = 10,
        sort: str = "-createdAt",
    ) -> ListResponse[TaskResponse]:
        """
        List tasks with optional filters.

        A project filter requires project scope on that project. Without one,
        SCOPE_UNFILTERED_LISTS decides whether results are limited to the
        caller's projects.
        """
        order_by = parse_sort(sort, SORT_COLUMNS)
        stmt = select(Task)

        if project_id is not None:
            project = await get_project_or_404(self.db, project_id)
            require_project_access(
                caller, project, "Not authorized to access tasks in this project"
            )
            stmt = stmt.where(Task.project_id == project_id)
        elif settings.SCOPE_UNFILTERED_LISTS:
            stmt = stmt.where(Task.project_id.in_(accessible_project_ids(caller.id)))
        else:
            logger.warning(
                "Unscoped task listing by user_id=%s (SCOPE_UNFILTERED_LISTS is off)",
                caller.id,
            )

        if status is not None:
            stmt = stmt.where(Task.status == status)
        if priority is not None:
            stmt = stmt.where(Task.priority == priority)
        if assigned_to is not None:
            stmt = stmt.where(Task.assigned_to_id == assigned_to)

        tasks, pagination = await paginate(
            self.db, stmt, page=page, limit=limit, order_by=order_by
        )
        return ListResponse[TaskResponse](
            data=[TaskResponse.model_validate(t) for t in tasks],
            pagination=pagination,
        )

    # -----------------------------------------------------------------------
    # Get Task
    # -----------------------------------------------------------------------

    async def get_task(self, task_id: UUID, caller: User) -> TaskResponse:
        task = await get_task_or_404(self.db, task_id)
        require_project_access(caller, task.project, "Not authorized to access this task")
        return TaskResponse.model_validate(task)

    # -----------------------------------------------------------------------
    # Create Task
    # -----------------------------------------------------------------------

    async def create_task(self, data: TaskCreateRequest, creator: User) -> TaskResponse:
        """Create a task in a project the creator manages or belongs to."""
        project = await get_project_or_404(self.db, data.project)
        require_project_access(
            creator, project, "Not authorized to create tasks in this project"
        )
        if data.assigned_to is not None:
            await get_user_or_404(self.db, data.assigned_to)

        task = Task(
            title=data.title,
            description=data.description,
            project_id=project.id,
            assigned_to_id=data.assigned_to,
            created_by_id=creator.id,
            status=data.status,
            priority=data.priority,
            due_date=data.due_date,
            tags=data.tags,
            estimated_hours=data.estimated_hours,
        )
        self.db.add(task)
        await self.db.commit()

        task = await get_task_or_404(self.db, task.id)
        response = TaskResponse.model_validate(task)

        await record_activity(
            self.db,
            action=ActivityAction.create,
            entity_type=EntityType.task,
            entity_id=task.id,
            description=f'Created task "{task.title}"',
            user_id=creator.id,
            project_id=project.id,
        )
        return response

    # -----------------------------------------------------------------------
    # Update Task
    # -----------------------------------------------------------------------

    async def update_task(
        self,
        task_id: UUID,
        data: TaskUpdateRequest,
        actor: User,
    ) -> TaskResponse:
        """
        Partially update a task. Any project manager or member may do this.

        The full prior task is kept as ``oldValues`` on the activity entry.
        """
        task = await get_task_or_404(self.db, task_id)
        require_project_access(actor, task.project, "Not authorized to update this task")

        old_values = _snapshot(task)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("assigned_to") is not None:
            await get_user_or_404(self.db, changes["assigned_to"])

        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            if field == "assigned_to":
                task.assigned_to_id = value
            else:
                setattr(task, field, value)
        await self.db.commit()

        task = await get_task_or_404(self.db, task_id)
        response = TaskResponse.model_validate(task)

        await record_activity(
            self.db,
            action=ActivityAction.update,
            entity_type=EntityType.task,
            entity_id=task.id,
            description=f'Updated task "{task.title}"',
            old_values=old_values,
            new_values=response.model_dump(mode="json", by_alias=True),
            user_id=actor.id,
            project_id=task.project_id,
        )
        return response

    # -----------------------------------------------------------------------
    # Delete Task
    # -----------------------------------------------------------------------

    async def delete_task(self, task_id: UUID, actor: User) -> None:
        """
        Delete a task. Only the project manager or an admin may do this,
        regardless of who created the task. Its comments go with it.
        """
        task = await get_task_or_404(self.db, task_id)
        require_privileged(actor, task.project.manager_id, "Not authorized to delete this task")

        title = task.title
        project_id = task.project_id
        comments_deleted = (
            await self.db.execute(
                delete(Comment)
                .where(Comment.task_id == task.id)
                .execution_options(synchronize_session=False)
            )
        ).rowcount
        await self.db.delete(task)
        await self.db.commit()

        description = f'Deleted task "{title}"'
        if comments_deleted:
            description += f" (removed {comments_deleted} comments)"

        await record_activity(
            self.db,
            action=ActivityAction.delete,
            entity_type=EntityType.task,
            entity_id=task_id,
            description=description,
            user_id=actor.id,
            project_id=project_id,
        )
