"""
Authorization policy.

Two pure predicates decide every access question:

- project scope: the caller is the project's manager or one of its members.
  Gates reads of projects, tasks, comments and activity, and the creation
  and update of tasks and comments.
- privileged mutation: the caller is the designated owner of the entity or
  a global admin. Gates project update/delete/membership, task delete
  (owner = project manager) and comment update/delete (owner = author).

Task update uses the broader project-scope check while task
delete uses the privileged one.
"""

from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from taskboard.core.exceptions import AuthorizationError
from taskboard.models.user import UserRole


class Caller(Protocol):
    id: UUID
    role: Any


class ProjectLike(Protocol):
    manager_id: UUID
    members: Any


def can_access_project(caller: Caller, project: ProjectLike) -> bool:
    """True iff the caller manages the project or is one of its members."""
    if caller.id == project.manager_id:
        return True
    return any(member.id == caller.id for member in project.members)


def can_mutate_privileged(caller: Caller, owner_id: UUID) -> bool:
    """True iff the caller is the owner or a global admin."""
    return caller.id == owner_id or caller.role == UserRole.admin


def require_project_access(caller: Caller, project: ProjectLike, message: str) -> None:
    if not can_access_project(caller, project):
        raise AuthorizationError(message)


def require_privileged(caller: Caller, owner_id: UUID, message: str) -> None:
    if not can_mutate_privileged(caller, owner_id):
        raise AuthorizationError(message)
