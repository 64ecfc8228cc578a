"""
Activity log business logic.

``record_activity`` is the only writer of the activity log. Services call
it after their primary mutation has been committed; a failure here is
logged and swallowed so it can never fail or undo that mutation.
``ActivityService`` serves the read-only endpoints.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.permissions import require_project_access
from taskboard.models.activity_log import ActivityAction, ActivityLog, EntityType
from taskboard.models.user import User
from taskboard.schemas.activity import ActivityResponse
from taskboard.schemas.common import ListResponse
from taskboard.services.lookups import accessible_project_ids, get_project_or_404
from taskboard.services.pagination import paginate, parse_sort

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": ActivityLog.created_at,
    "action": ActivityLog.action,
    "entityType": ActivityLog.entity_type,
}


async def record_activity(
    db: AsyncSession,
    *,
    action: ActivityAction,
    entity_type: EntityType,
    entity_id: UUID,
    user_id: UUID,
    description: str,
    project_id: UUID | None = None,
    old_values: dict[str, Any] | None = None,
    new_values: dict[str, Any] | None = None,
) -> None:
    """
    Append one activity entry and commit it.

    Must be called after the mutation it describes has been committed and
    after the response payload has been built: on failure the session is
    rolled back, which expires every instance loaded in it.
    """
    try:
        entry = ActivityLog(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            old_values=old_values,
            new_values=new_values,
            user_id=user_id,
            project_id=project_id,
        )
        db.add(entry)
        await db.commit()
    except Exception:
        logger.exception(
            "Activity logging failed: action=%s entity_type=%s entity_id=%s user_id=%s",
            action.value,
            entity_type.value,
            entity_id,
            user_id,
        )
        await db.rollback()
        return

    logger.debug(
        "Activity recorded: action=%s entity_type=%s entity_id=%s user_id=%s",
        action.value,
        entity_type.value,
        entity_id,
        user_id,
    )


class ActivityService:
    """Read access to the activity log."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_activity(
        self,
        caller: User,
        project_id: UUID | None = None,
        user_id: UUID | None = None,
        page: int = 1,
        limit: int = 20,
        sort: str = "-createdAt",
    ) -> ListResponse[ActivityResponse]:
        """
        List activity, optionally narrowed to a project and/or an actor.

        A project filter requires project scope on that project. Without one,
        SCOPE_UNFILTERED_LISTS decides whether results are limited to the
        caller's projects.
        """
        order_by = parse_sort(sort, SORT_COLUMNS)
        stmt = select(ActivityLog)

        if project_id is not None:
            project = await get_project_or_404(self.db, project_id)
            require_project_access(
                caller, project, "Not authorized to view activity logs for this project"
            )
            stmt = stmt.where(ActivityLog.project_id == project_id)
        elif settings.SCOPE_UNFILTERED_LISTS:
            stmt = stmt.where(ActivityLog.project_id.in_(accessible_project_ids(caller.id)))
        else:
            logger.warning(
                "Unscoped activity listing by user_id=%s (SCOPE_UNFILTERED_LISTS is off)",
                caller.id,
            )

        if user_id is not None:
            stmt = stmt.where(ActivityLog.user_id == user_id)

        logs, pagination = await paginate(
            self.db, stmt, page=page, limit=limit, order_by=order_by
        )
        return ListResponse[ActivityResponse](
            data=[ActivityResponse.model_validate(log) for log in logs],
            pagination=pagination,
        )

    async def list_project_activity(
        self,
        caller: User,
        project_id: UUID,
        page: int = 1,
        limit: int = 20,
    ) -> ListResponse[ActivityResponse]:
        """List a project's activity, newest first."""
        project = await get_project_or_404(self.db, project_id)
        require_project_access(
            caller, project, "Not authorized to view activity logs for this project"
        )

        logs, pagination = await paginate(
            self.db,
            select(ActivityLog).where(ActivityLog.project_id == project_id),
            page=page,
            limit=limit,
            order_by=[ActivityLog.created_at.desc()],
        )
        return ListResponse[ActivityResponse](
            data=[ActivityResponse.model_validate(log) for log in logs],
            pagination=pagination,
        )
