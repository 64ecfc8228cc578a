"""
Shared schema building blocks.

Response envelope, pagination metadata, camelCase base models and the
compact user summary embedded in other responses.
"""

from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serialized with camelCase keys, populated from ORM attributes or snake_case names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(BaseModel):
    """Request bodies: camelCase keys accepted, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class DataResponse(CamelModel, Generic[T]):
    """``{success, data}`` envelope for single resources."""

    success: bool = True
    data: T


class ListResponse(CamelModel, Generic[T]):
    """``{success, data, pagination}`` envelope for paginated lists."""

    success: bool = True
    data: list[T]
    pagination: Pagination


class ErrorResponse(CamelModel):
    success: bool = False
    message: str


# ---------------------------------------------------------------------------
# Nested response objects
# ---------------------------------------------------------------------------

class UserSummaryResponse(CamelModel):
    """Compact user info embedded in project, task, comment and activity responses."""

    id: UUID
    name: str
    email: str
    avatar: str | None = None
