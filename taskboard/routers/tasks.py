"""
Task management endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.dependencies import get_current_user
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.models.user import User
from taskboard.schemas.common import DataResponse, ListResponse
from taskboard.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from taskboard.services.task_service import TaskService

router = APIRouter()


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db=db)


# ---------------------------------------------------------------------------
# List Tasks
# ---------------------------------------------------------------------------

@router.get(
    "/tasks",
    response_model=ListResponse[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    project: UUID | None = Query(default=None),
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    priority: TaskPriority | None = Query(default=None),
    assigned_to: UUID | None = Query(default=None, alias="assignedTo"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    sort: str = Query(default="-createdAt", max_length=100),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> ListResponse[TaskResponse]:
    return await service.list_tasks(
        current_user,
        project_id=project,
        status=status_filter,
        priority=priority,
        assigned_to=assigned_to,
        page=page,
        limit=limit,
        sort=sort,
    )


# ---------------------------------------------------------------------------
# Create Task
# ---------------------------------------------------------------------------

@router.post(
    "/tasks",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    data: TaskCreateRequest,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    return DataResponse(data=await service.create_task(data, current_user))


# ---------------------------------------------------------------------------
# Get / Update / Delete Task
# ---------------------------------------------------------------------------

@router.get(
    "/tasks/{task_id}",
    response_model=DataResponse[TaskResponse],
    summary="Get task detail",
)
async def get_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    return DataResponse(data=await service.get_task(task_id, current_user))


@router.put(
    "/tasks/{task_id}",
    response_model=DataResponse[TaskResponse],
    summary="Update a task",
)
async def update_task(
    task_id: UUID,
    data: TaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    return DataResponse(data=await service.update_task(task_id, data, current_user))


@router.delete(
    "/tasks/{task_id}",
    response_model=DataResponse[dict],
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> DataResponse[dict]:
    await service.delete_task(task_id, current_user)
    return DataResponse(data={})
