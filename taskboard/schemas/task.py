"""
Task schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.common import CamelModel, RequestModel, UserSummaryResponse
from taskboard.schemas.project import ProjectSummaryResponse


class TaskCreateRequest(RequestModel):
    """Request body for POST /tasks."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    project: UUID
    assigned_to: UUID | None = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = Field(default=None, ge=0)

    model_config = {"str_strip_whitespace": True}


class TaskUpdateRequest(RequestModel):
    """
    Request body for PUT /tasks/{id}.

    ``project`` and ``createdBy`` are fixed at creation and rejected here.
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    assigned_to: UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)

    model_config = {"str_strip_whitespace": True}


class TaskResponse(CamelModel):
    id: UUID
    title: str
    description: str | None
    project: ProjectSummaryResponse
    assigned_to: UserSummaryResponse | None
    created_by: UserSummaryResponse
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    tags: list[str]
    estimated_hours: float | None
    actual_hours: float | None
    created_at: datetime
    updated_at: datetime
