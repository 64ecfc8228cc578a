"""
FastAPI dependency injection functions.

Provides Redis connections and the authenticated caller.
"""

from __future__ import annotations

from uuid import UUID

import redis.asyncio as aioredis
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.config import settings
from taskboard.core.database import get_db
from taskboard.core.exceptions import AuthenticationError
from taskboard.core.security import TokenType, blacklist_redis_key, decode_token
from taskboard.models.user import User

# ---------------------------------------------------------------------------
# HTTP Bearer scheme (auto_error=False so we can return custom 401)
# ---------------------------------------------------------------------------

bearer_scheme = HTTPBearer(auto_error=False)

# ---------------------------------------------------------------------------
# Redis
# ---------------------------------------------------------------------------

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """
    Return a shared async Redis client.

    Uses a module-level pool so connections are reused across requests.
    """
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            str(settings.REDIS_URL),
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_pool


async def close_redis() -> None:
    global _redis_pool
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------

async def get_access_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    redis: aioredis.Redis = Depends(get_redis),
) -> dict:
    """
    Validate the Bearer JWT and return its payload.

    Raises 401 if no token is provided, the token is invalid or expired,
    or its JTI has been revoked.
    """
    if credentials is None:
        raise AuthenticationError("Authorization header required", code="MISSING_TOKEN")

    try:
        payload = decode_token(credentials.credentials, TokenType.access)
    except JWTError:
        raise AuthenticationError("Token is invalid or expired", code="INVALID_TOKEN")

    jti: str = payload.get("jti", "")
    if await redis.exists(blacklist_redis_key(jti)):
        raise AuthenticationError("Token has been revoked", code="TOKEN_REVOKED")

    return payload


async def get_current_user(
    payload: dict = Depends(get_access_token_payload),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Return the authenticated User.

    Raises 401 if the token subject does not exist or is inactive.
    """
    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise AuthenticationError("Token is invalid or expired", code="INVALID_TOKEN")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise AuthenticationError("User not found or inactive", code="USER_NOT_FOUND")

    return user
