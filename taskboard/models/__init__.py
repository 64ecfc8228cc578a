"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from taskboard.models.base import Base, TimestampMixin, UUIDMixin
from taskboard.models.user import User, UserRole
from taskboard.models.project import DEFAULT_PROJECT_COLOR, Project, ProjectStatus, project_members
from taskboard.models.task import Task, TaskPriority, TaskStatus
from taskboard.models.comment import Comment
from taskboard.models.activity_log import ActivityAction, ActivityLog, EntityType

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "UserRole",
    "Project",
    "ProjectStatus",
    "project_members",
    "DEFAULT_PROJECT_COLOR",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Comment",
    "ActivityLog",
    "ActivityAction",
    "EntityType",
]
