"""
Comment endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.dependencies import get_current_user
from taskboard.models.user import User
from taskboard.schemas.comment import CommentCreateRequest, CommentResponse, CommentUpdateRequest
from taskboard.schemas.common import DataResponse, ListResponse
from taskboard.services.comment_service import CommentService

router = APIRouter()


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db=db)


@router.get(
    "/comments/task/{task_id}",
    response_model=ListResponse[CommentResponse],
    summary="List comments on a task",
)
async def list_comments(
    task_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    current_user: User = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> ListResponse[CommentResponse]:
    return await service.list_comments(task_id, current_user, page=page, limit=limit)


@router.post(
    "/comments",
    response_model=DataResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a task",
)
async def create_comment(
    data: CommentCreateRequest,
    current_user: User = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> DataResponse[CommentResponse]:
    return DataResponse(data=await service.create_comment(data, current_user))


@router.put(
    "/comments/{comment_id}",
    response_model=DataResponse[CommentResponse],
    summary="Edit a comment",
)
async def update_comment(
    comment_id: UUID,
    data: CommentUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> DataResponse[CommentResponse]:
    return DataResponse(data=await service.update_comment(comment_id, data, current_user))


@router.delete(
    "/comments/{comment_id}",
    response_model=DataResponse[dict],
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
) -> DataResponse[dict]:
    await service.delete_comment(comment_id, current_user)
    return DataResponse(data={})
