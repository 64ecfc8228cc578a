"""
Authentication schemas.

Request/response models for all auth endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from taskboard.models.user import UserRole
from taskboard.schemas.common import CamelModel, RequestModel


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

class RegisterRequest(RequestModel):
    """Request body for POST /auth/register."""

    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    role: UserRole = UserRole.user


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

class LoginRequest(RequestModel):
    """Request body for POST /auth/login."""

    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    """Response for register, login and token refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token TTL in seconds")


# ---------------------------------------------------------------------------
# Refresh / Logout
# ---------------------------------------------------------------------------

class RefreshRequest(RequestModel):
    """Request body for POST /auth/refresh."""

    refresh_token: str


class LogoutRequest(RequestModel):
    """Request body for POST /auth/logout."""

    refresh_token: str


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

class MeResponse(CamelModel):
    """Response for GET /auth/me."""

    id: UUID
    name: str
    email: str
    role: UserRole
    avatar: str | None
    created_at: datetime
