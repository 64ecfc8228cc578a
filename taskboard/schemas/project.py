"""
Project schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.models.project import ProjectStatus
from taskboard.models.task import TaskStatus
from taskboard.schemas.common import CamelModel, RequestModel, UserSummaryResponse


class ProjectCreateRequest(RequestModel):
    """Request body for POST /projects."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    # Accepted for compatibility; the creator is always the sole initial member
    members: list[UUID] | None = None
    status: ProjectStatus = ProjectStatus.active
    start_date: datetime | None = None
    end_date: datetime | None = None
    color: str | None = Field(default=None, max_length=20)

    model_config = {"str_strip_whitespace": True}


class ProjectUpdateRequest(RequestModel):
    """Request body for PUT /projects/{id}. Only supplied fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    status: ProjectStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    color: str | None = Field(default=None, max_length=20)

    model_config = {"str_strip_whitespace": True}


class MemberRequest(RequestModel):
    """Request body for POST/DELETE /projects/{id}/members."""

    member_id: UUID


class ProjectResponse(CamelModel):
    id: UUID
    name: str
    description: str | None
    manager: UserSummaryResponse
    members: list[UserSummaryResponse]
    status: ProjectStatus
    start_date: datetime | None
    end_date: datetime | None
    color: str
    created_at: datetime
    updated_at: datetime


class TaskStatResponse(CamelModel):
    status: TaskStatus
    count: int


class ProjectDetailResponse(ProjectResponse):
    """Project plus a per-status count of its tasks."""

    task_stats: list[TaskStatResponse] = Field(default_factory=list)


class ProjectSummaryResponse(CamelModel):
    """Compact project info embedded in task responses."""

    id: UUID
    name: str
    color: str
