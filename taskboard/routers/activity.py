"""
Activity log endpoints. Read-only.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.dependencies import get_current_user
from taskboard.models.user import User
from taskboard.schemas.activity import ActivityResponse
from taskboard.schemas.common import ListResponse
from taskboard.services.activity_service import ActivityService

router = APIRouter()

ACTIVITY_PAGE_LIMIT = 20


def get_activity_service(db: AsyncSession = Depends(get_db)) -> ActivityService:
    return ActivityService(db=db)


@router.get(
    "/activity",
    response_model=ListResponse[ActivityResponse],
    summary="List activity logs",
)
async def list_activity(
    project_id: UUID | None = Query(default=None, alias="projectId"),
    user_id: UUID | None = Query(default=None, alias="userId"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ACTIVITY_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    sort: str = Query(default="-createdAt", max_length=100),
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> ListResponse[ActivityResponse]:
    return await service.list_activity(
        current_user,
        project_id=project_id,
        user_id=user_id,
        page=page,
        limit=limit,
        sort=sort,
    )


@router.get(
    "/activity/project/{project_id}",
    response_model=ListResponse[ActivityResponse],
    summary="List activity logs for a project",
)
async def list_project_activity(
    project_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ACTIVITY_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> ListResponse[ActivityResponse]:
    return await service.list_project_activity(
        current_user, project_id, page=page, limit=limit
    )
