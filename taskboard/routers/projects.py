"""
Project management endpoints.

CRUD for projects and their member set.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.dependencies import get_current_user
from taskboard.models.project import ProjectStatus
from taskboard.models.user import User
from taskboard.schemas.common import DataResponse, ListResponse
from taskboard.schemas.project import (
    MemberRequest,
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdateRequest,
)
from taskboard.services.project_service import ProjectService

router = APIRouter()


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db=db)


@router.get(
    "/projects",
    response_model=ListResponse[ProjectResponse],
    summary="List the caller's projects",
)
async def list_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    sort: str = Query(default="-createdAt", max_length=100),
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ListResponse[ProjectResponse]:
    return await service.list_projects(
        current_user, status=status_filter, page=page, limit=limit, sort=sort
    )


@router.post(
    "/projects",
    response_model=DataResponse[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
)
async def create_project(
    data: ProjectCreateRequest,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[ProjectResponse]:
    return DataResponse(data=await service.create_project(data, current_user))


@router.get(
    "/projects/{project_id}",
    response_model=DataResponse[ProjectDetailResponse],
    summary="Get project with task status breakdown",
)
async def get_project(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[ProjectDetailResponse]:
    return DataResponse(data=await service.get_project(project_id, current_user))


@router.put(
    "/projects/{project_id}",
    response_model=DataResponse[ProjectResponse],
    summary="Update a project",
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[ProjectResponse]:
    return DataResponse(data=await service.update_project(project_id, data, current_user))


@router.delete(
    "/projects/{project_id}",
    response_model=DataResponse[dict],
    summary="Delete a project and its tasks",
)
async def delete_project(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[dict]:
    await service.delete_project(project_id, current_user)
    return DataResponse(data={})


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

@router.post(
    "/projects/{project_id}/members",
    response_model=DataResponse[ProjectResponse],
    summary="Add a member to a project",
)
async def add_member(
    project_id: UUID,
    data: MemberRequest,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[ProjectResponse]:
    return DataResponse(data=await service.add_member(project_id, data.member_id, current_user))


@router.delete(
    "/projects/{project_id}/members",
    response_model=DataResponse[ProjectResponse],
    summary="Remove a member from a project",
)
async def remove_member(
    project_id: UUID,
    data: MemberRequest,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> DataResponse[ProjectResponse]:
    return DataResponse(
        data=await service.remove_member(project_id, data.member_id, current_user)
    )
