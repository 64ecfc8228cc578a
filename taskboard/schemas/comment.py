"""
Comment schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.schemas.common import CamelModel, RequestModel, UserSummaryResponse


class Attachment(CamelModel):
    filename: str | None = None
    url: str | None = None
    mimetype: str | None = None

    model_config = {"extra": "forbid"}


class CommentCreateRequest(RequestModel):
    """Request body for POST /comments."""

    content: str = Field(min_length=1, max_length=1000)
    task: UUID
    attachments: list[Attachment] = Field(default_factory=list)


class CommentUpdateRequest(RequestModel):
    """Request body for PUT /comments/{id}."""

    content: str | None = Field(default=None, min_length=1, max_length=1000)
    attachments: list[Attachment] | None = None


class CommentResponse(CamelModel):
    id: UUID
    content: str
    task_id: UUID
    user: UserSummaryResponse
    attachments: list[Attachment]
    created_at: datetime
    updated_at: datetime
