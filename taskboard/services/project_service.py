"""
Project business logic.

Handles project CRUD and membership. Every mutation is committed first and
then recorded in the activity log.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import ValidationError
from taskboard.core.permissions import require_privileged, require_project_access
from taskboard.models.activity_log import ActivityAction, EntityType
from taskboard.models.comment import Comment
from taskboard.models.project import DEFAULT_PROJECT_COLOR, Project, ProjectStatus
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.common import ListResponse
from taskboard.schemas.project import (
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdateRequest,
    TaskStatResponse,
)
from taskboard.services.activity_service import record_activity
from taskboard.services.lookups import get_project_or_404, get_user_or_404
from taskboard.services.pagination import paginate, parse_sort

SORT_COLUMNS = {
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
    "name": Project.name,
    "status": Project.status,
    "startDate": Project.start_date,
    "endDate": Project.end_date,
}

# Columns that may not be cleared through a partial update
_REQUIRED_FIELDS = {"name", "status", "color"}


def _snapshot(project: Project) -> dict[str, Any]:
    return ProjectResponse.model_validate(project).model_dump(mode="json", by_alias=True)


class ProjectService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # List / Get
    # -----------------------------------------------------------------------

    async def list_projects(
        self,
        caller: User,
        status: ProjectStatus | None = None,
        page: int = 1,
        limit: int = 10,
        sort: str = "-createdAt",
    ) -> ListResponse[ProjectResponse]:
        """Projects the caller manages or belongs to."""
        order_by = parse_sort(sort, SORT_COLUMNS)
        stmt = select(Project).where(
            or_(
                Project.manager_id == caller.id,
                Project.members.any(User.id == caller.id),
            )
        )
        if status is not None:
            stmt = stmt.where(Project.status == status)

        projects, pagination = await paginate(
            self.db, stmt, page=page, limit=limit, order_by=order_by
        )
        return ListResponse[ProjectResponse](
            data=[ProjectResponse.model_validate(p) for p in projects],
            pagination=pagination,
        )

    async def get_project(self, project_id: UUID, caller: User) -> ProjectDetailResponse:
        """Project detail with a count of its tasks per status."""
        project = await get_project_or_404(self.db, project_id)
        require_project_access(caller, project, "Not authorized to access this project")

        result = await self.db.execute(
            select(Task.status, func.count())
            .where(Task.project_id == project.id)
            .group_by(Task.status)
            .order_by(Task.status)
        )
        task_stats = [TaskStatResponse(status=row[0], count=row[1]) for row in result.all()]

        detail = ProjectDetailResponse.model_validate(project)
        detail.task_stats = task_stats
        return detail

    # -----------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------

    async def create_project(self, data: ProjectCreateRequest, creator: User) -> ProjectResponse:
        """Create a project. The creator becomes manager and sole member."""
        project = Project(
            name=data.name,
            description=data.description,
            manager_id=creator.id,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
            color=data.color or DEFAULT_PROJECT_COLOR,
        )
        project.members = [creator]
        self.db.add(project)
        await self.db.commit()

        project = await get_project_or_404(self.db, project.id)
        response = ProjectResponse.model_validate(project)

        await record_activity(
            self.db,
            action=ActivityAction.create,
            entity_type=EntityType.project,
            entity_id=project.id,
            description=f'Created project "{project.name}"',
            user_id=creator.id,
            project_id=project.id,
        )
        return response

    # -----------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------

    async def update_project(
        self, project_id: UUID, data: ProjectUpdateRequest, actor: User
    ) -> ProjectResponse:
        """Merge the supplied fields onto the project. Manager or admin only."""
        project = await get_project_or_404(self.db, project_id)
        require_privileged(actor, project.manager_id, "Not authorized to update this project")

        old_values = _snapshot(project)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(project, field, value)
        await self.db.commit()

        project = await get_project_or_404(self.db, project_id)
        response = ProjectResponse.model_validate(project)

        await record_activity(
            self.db,
            action=ActivityAction.update,
            entity_type=EntityType.project,
            entity_id=project.id,
            description=f'Updated project "{project.name}"',
            old_values=old_values,
            new_values=response.model_dump(mode="json", by_alias=True),
            user_id=actor.id,
            project_id=project.id,
        )
        return response

    # -----------------------------------------------------------------------
    # Delete
    # -----------------------------------------------------------------------

    async def delete_project(self, project_id: UUID, actor: User) -> None:
        """
        Delete a project and everything under it.

        Tasks are removed, and so are the comments on those tasks; the
        activity description records how many of each went with it.
        """
        project = await get_project_or_404(self.db, project_id)
        require_privileged(actor, project.manager_id, "Not authorized to delete this project")

        name = project.name
        task_ids = select(Task.id).where(Task.project_id == project.id)
        comments_deleted = (
            await self.db.execute(
                delete(Comment)
                .where(Comment.task_id.in_(task_ids))
                .execution_options(synchronize_session=False)
            )
        ).rowcount
        tasks_deleted = (
            await self.db.execute(
                delete(Task)
                .where(Task.project_id == project.id)
                .execution_options(synchronize_session=False)
            )
        ).rowcount
        await self.db.delete(project)
        await self.db.commit()

        await record_activity(
            self.db,
            action=ActivityAction.delete,
            entity_type=EntityType.project,
            entity_id=project_id,
            description=(
                f'Deleted project "{name}" '
                f"(removed {tasks_deleted} tasks and {comments_deleted} comments)"
            ),
            user_id=actor.id,
            project_id=project_id,
        )

    # -----------------------------------------------------------------------
    # Members
    # -----------------------------------------------------------------------

    async def add_member(self, project_id: UUID, member_id: UUID, actor: User) -> ProjectResponse:
        """Add a user to the project. Adding an existing member is an error."""
        project = await get_project_or_404(self.db, project_id)
        require_privileged(
            actor, project.manager_id, "Not authorized to add members to this project"
        )
        member = await get_user_or_404(self.db, member_id)

        if member.id in project.member_ids:
            raise ValidationError("Member already in project", code="ALREADY_MEMBER")

        project.members.append(member)
        await self.db.commit()

        project = await get_project_or_404(self.db, project_id)
        response = ProjectResponse.model_validate(project)

        await record_activity(
            self.db,
            action=ActivityAction.assign,
            entity_type=EntityType.project,
            entity_id=project.id,
            description=f'Added {member.name} to project "{project.name}"',
            user_id=actor.id,
            project_id=project.id,
        )
        return response

    async def remove_member(
        self, project_id: UUID, member_id: UUID, actor: User
    ) -> ProjectResponse:
        """Remove a user from the project. Removing a non-member is a no-op."""
        project = await get_project_or_404(self.db, project_id)
        require_privileged(
            actor, project.manager_id, "Not authorized to remove members from this project"
        )

        if member_id not in project.member_ids:
            return ProjectResponse.model_validate(project)

        project.members = [m for m in project.members if m.id != member_id]
        await self.db.commit()

        project = await get_project_or_404(self.db, project_id)
        response = ProjectResponse.model_validate(project)

        await record_activity(
            self.db,
            action=ActivityAction.update,
            entity_type=EntityType.project,
            entity_id=project.id,
            description=f'Removed member from project "{project.name}"',
            old_values={"memberId": str(member_id)},
            user_id=actor.id,
            project_id=project.id,
        )
        return response
