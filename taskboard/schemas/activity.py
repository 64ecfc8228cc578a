"""
Activity log schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from taskboard.models.activity_log import ActivityAction, EntityType
from taskboard.schemas.common import CamelModel, UserSummaryResponse


class ActivityResponse(CamelModel):
    id: UUID
    action: ActivityAction
    entity_type: EntityType
    entity_id: UUID
    description: str | None
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    user: UserSummaryResponse
    project_id: UUID | None
    created_at: datetime
