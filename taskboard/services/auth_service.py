"""
Authentication business logic.

Handles user registration, login, token refresh and logout.
All business logic lives here; routers only handle HTTP concerns.
"""

from __future__ import annotations

import logging
from uuid import UUID

import redis.asyncio as aioredis
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from taskboard.core.security import (
    TokenType,
    access_token_ttl_seconds,
    blacklist_redis_key,
    decode_token,
    hash_password,
    issue_token,
    refresh_token_redis_key,
    refresh_token_ttl_seconds,
    verify_password,
)
from taskboard.models.user import User
from taskboard.schemas.auth import LoginRequest, MeResponse, RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Handles all authentication operations."""

    def __init__(self, db: AsyncSession, redis: aioredis.Redis) -> None:
        self.db = db
        self.redis = redis

    # -----------------------------------------------------------------------
    # Register
    # -----------------------------------------------------------------------

    async def register(self, data: RegisterRequest) -> TokenResponse:
        """
        Register a new user.

        - Validates email uniqueness
        - Hashes password
        - Creates user record
        - Issues JWT tokens
        """
        email = data.email.lower()
        existing = await self.db.execute(select(User).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Email is already registered", code="EMAIL_TAKEN")

        user = User(
            name=data.name,
            email=email,
            password_hash=hash_password(data.password),
            role=data.role,
        )
        self.db.add(user)
        await self.db.flush()  # Get user.id without committing

        logger.info("User registered: user_id=%s role=%s", user.id, user.role.value)
        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Login
    # -----------------------------------------------------------------------

    async def login(self, data: LoginRequest) -> TokenResponse:
        """
        Authenticate user with email + password.

        Raises 401 for invalid credentials (never reveals which field is wrong).
        """
        result = await self.db.execute(select(User).where(User.email == data.email.lower()))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(data.password, user.password_hash):
            raise AuthenticationError("Invalid email or password", code="INVALID_CREDENTIALS")

        if not user.is_active:
            raise AuthorizationError("Account is disabled", code="ACCOUNT_DISABLED")

        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Refresh
    # -----------------------------------------------------------------------

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """
        Exchange a valid refresh token for a new token pair.

        - Validates refresh token JWT
        - Checks token exists in Redis
        - Rotates: deletes old refresh token, issues new pair
        """
        try:
            payload = decode_token(refresh_token, TokenType.refresh)
            user_id = UUID(payload.get("sub", ""))
        except (JWTError, ValueError):
            raise AuthenticationError(
                "Refresh token is invalid or expired", code="INVALID_TOKEN"
            )

        jti: str = payload.get("jti", "")
        redis_key = refresh_token_redis_key(str(user_id), jti)
        if not await self.redis.exists(redis_key):
            raise AuthenticationError("Refresh token has been revoked", code="TOKEN_REVOKED")

        user = await self.db.scalar(select(User).where(User.id == user_id))
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive", code="USER_NOT_FOUND")

        # Rotate: delete old refresh token
        await self.redis.delete(redis_key)

        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Logout
    # -----------------------------------------------------------------------

    async def logout(self, access_token_jti: str, refresh_token: str) -> None:
        """
        Logout user by:
        - Blacklisting the access token JTI
        - Deleting the refresh token from Redis
        """
        await self.redis.setex(
            blacklist_redis_key(access_token_jti),
            access_token_ttl_seconds(),
            "1",
        )

        try:
            payload = decode_token(refresh_token, TokenType.refresh)
        except JWTError:
            # Already expired refresh tokens need no cleanup
            return
        await self.redis.delete(
            refresh_token_redis_key(payload.get("sub", ""), payload.get("jti", ""))
        )

    # -----------------------------------------------------------------------
    # Get current user (me)
    # -----------------------------------------------------------------------

    async def get_me(self, user: User) -> MeResponse:
        """Return current user profile."""
        return MeResponse.model_validate(user)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    async def _issue_tokens(self, user: User) -> TokenResponse:
        """
        Create and store access + refresh token pair for a user.

        Stores refresh token JTI in Redis with TTL.
        """
        user_id = str(user.id)

        refresh_token, refresh_jti = issue_token(user_id, TokenType.refresh)
        access_token, _ = issue_token(user_id, TokenType.access)

        await self.redis.setex(
            refresh_token_redis_key(user_id, refresh_jti),
            refresh_token_ttl_seconds(),
            "1",
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=access_token_ttl_seconds(),
        )
