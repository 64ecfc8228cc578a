"""
Comment business logic.

Reading and creating comments follows the task's project scope. Editing
and deleting follow authorship instead: only the author or an admin,
whatever their role in the project.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.permissions import require_privileged, require_project_access
from taskboard.models.activity_log import ActivityAction, EntityType
from taskboard.models.comment import Comment
from taskboard.models.user import User
from taskboard.schemas.comment import CommentCreateRequest, CommentResponse, CommentUpdateRequest
from taskboard.schemas.common import ListResponse
from taskboard.services.activity_service import record_activity
from taskboard.services.lookups import get_comment_or_404, get_task_or_404
from taskboard.services.pagination import paginate


class CommentService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_comments(
        self,
        task_id: UUID,
        caller: User,
        page: int = 1,
        limit: int = 10,
    ) -> ListResponse[CommentResponse]:
        """Comments on a task, newest first."""
        task = await get_task_or_404(self.db, task_id)
        require_project_access(
            caller, task.project, "Not authorized to access comments for this task"
        )

        comments, pagination = await paginate(
            self.db,
            select(Comment).where(Comment.task_id == task_id),
            page=page,
            limit=limit,
            order_by=[Comment.created_at.desc()],
        )
        return ListResponse[CommentResponse](
            data=[CommentResponse.model_validate(c) for c in comments],
            pagination=pagination,
        )

    async def create_comment(self, data: CommentCreateRequest, author: User) -> CommentResponse:
        task = await get_task_or_404(self.db, data.task)
        require_project_access(author, task.project, "Not authorized to comment on this task")

        comment = Comment(
            content=data.content,
            task_id=task.id,
            user_id=author.id,
            attachments=[a.model_dump() for a in data.attachments],
        )
        self.db.add(comment)
        await self.db.commit()

        comment = await get_comment_or_404(self.db, comment.id)
        response = CommentResponse.model_validate(comment)

        await record_activity(
            self.db,
            action=ActivityAction.comment,
            entity_type=EntityType.comment,
            entity_id=comment.id,
            description=f'Added comment to task "{task.title}"',
            user_id=author.id,
            project_id=task.project_id,
        )
        return response

    async def update_comment(
        self,
        comment_id: UUID,
        data: CommentUpdateRequest,
        actor: User,
    ) -> CommentResponse:
        comment = await get_comment_or_404(self.db, comment_id)
        require_privileged(actor, comment.user_id, "Not authorized to update this comment")

        old_values = CommentResponse.model_validate(comment).model_dump(mode="json", by_alias=True)

        if data.content is not None:
            comment.content = data.content
        if data.attachments is not None:
            comment.attachments = [a.model_dump() for a in data.attachments]
        await self.db.commit()

        comment = await get_comment_or_404(self.db, comment_id)
        task = await get_task_or_404(self.db, comment.task_id)
        response = CommentResponse.model_validate(comment)

        await record_activity(
            self.db,
            action=ActivityAction.update,
            entity_type=EntityType.comment,
            entity_id=comment.id,
            description=f'Updated comment on task "{task.title}"',
            old_values=old_values,
            new_values=response.model_dump(mode="json", by_alias=True),
            user_id=actor.id,
            project_id=task.project_id,
        )
        return response

    async def delete_comment(self, comment_id: UUID, actor: User) -> None:
        comment = await get_comment_or_404(self.db, comment_id)
        require_privileged(actor, comment.user_id, "Not authorized to delete this comment")

        task = await get_task_or_404(self.db, comment.task_id)
        task_title = task.title
        project_id = task.project_id

        await self.db.delete(comment)
        await self.db.commit()

        await record_activity(
            self.db,
            action=ActivityAction.delete,
            entity_type=EntityType.comment,
            entity_id=comment_id,
            description=f'Deleted comment on task "{task_title}"',
            user_id=actor.id,
            project_id=project_id,
        )
