"""
Authentication endpoints.

Register, login, logout, token refresh, me.
"""

from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.database import get_db
from taskboard.core.dependencies import get_access_token_payload, get_current_user, get_redis
from taskboard.models.user import User
from taskboard.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    MeResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from taskboard.schemas.common import DataResponse
from taskboard.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
) -> AuthService:
    """Dependency that constructs AuthService."""
    return AuthService(db=db, redis=redis)


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------

@router.post(
    "/register",
    response_model=DataResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[TokenResponse]:
    """
    Create a new user account.

    - Email must be globally unique
    - Returns JWT access + refresh tokens on success
    """
    return DataResponse(data=await service.register(data))


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@router.post(
    "/login",
    response_model=DataResponse[TokenResponse],
    summary="Login with email and password",
)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[TokenResponse]:
    return DataResponse(data=await service.login(data))


# ---------------------------------------------------------------------------
# Refresh
# ---------------------------------------------------------------------------

@router.post(
    "/refresh",
    response_model=DataResponse[TokenResponse],
    summary="Refresh access token",
)
async def refresh(
    data: RefreshRequest,
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[TokenResponse]:
    """
    Exchange a valid refresh token for a new access + refresh token pair.

    Refresh tokens are rotated on every use.
    """
    return DataResponse(data=await service.refresh(data.refresh_token))


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------

@router.post(
    "/logout",
    response_model=DataResponse[dict],
    summary="Logout and revoke tokens",
)
async def logout(
    data: LogoutRequest,
    payload: dict = Depends(get_access_token_payload),
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[dict]:
    """
    Logout the current user.

    - Blacklists the current access token JTI in Redis
    - Deletes the refresh token from Redis
    """
    await service.logout(
        access_token_jti=payload.get("jti", ""),
        refresh_token=data.refresh_token,
    )
    return DataResponse(data={})


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

@router.get(
    "/me",
    response_model=DataResponse[MeResponse],
    summary="Get current user profile",
)
async def get_me(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> DataResponse[MeResponse]:
    return DataResponse(data=await service.get_me(current_user))
