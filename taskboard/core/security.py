"""
Security utilities.

Password hashing, the access/refresh token pair and the Redis keys that
track issued refresh tokens and revoked access tokens.
"""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt as _bcrypt
from jose import JWTError, jwt

from taskboard.core.config import settings

# bcrypt ignores everything past 72 bytes
_BCRYPT_MAX_BYTES = 72


class TokenType(str, enum.Enum):
    access = "access"
    refresh = "refresh"


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a plaintext password with the configured BCRYPT_ROUNDS cost."""
    salt = _bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return _bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _bcrypt.checkpw(
        plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
        hashed_password.encode("utf-8"),
    )


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def _lifetime(token_type: TokenType) -> timedelta:
    if token_type is TokenType.access:
        return timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    return timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)


def issue_token(user_id: str, token_type: TokenType) -> tuple[str, str]:
    """
    Sign a token for ``user_id``.

    Returns:
        Tuple of (encoded_token, jti). The jti keys the refresh token store
        and the access token revocation list.
    """
    issued_at = datetime.now(UTC)
    jti = str(uuid.uuid4())
    claims: dict[str, Any] = {
        "sub": user_id,
        "jti": jti,
        "type": token_type.value,
        "iat": issued_at,
        "exp": issued_at + _lifetime(token_type),
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM), jti


def decode_token(token: str, expected: TokenType) -> dict[str, Any]:
    """
    Verify signature, expiry and token type.

    Raises:
        JWTError: If the token is invalid, expired, or of the other type.
    """
    claims = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if claims.get("type") != expected.value:
        raise JWTError(f"Expected a {expected.value} token")
    return claims


def access_token_ttl_seconds() -> int:
    return int(_lifetime(TokenType.access).total_seconds())


def refresh_token_ttl_seconds() -> int:
    return int(_lifetime(TokenType.refresh).total_seconds())


# ---------------------------------------------------------------------------
# Redis keys
# ---------------------------------------------------------------------------

def refresh_token_redis_key(user_id: str, jti: str) -> str:
    """Issued refresh token: refresh:{user_id}:{jti}"""
    return f"refresh:{user_id}:{jti}"


def blacklist_redis_key(jti: str) -> str:
    """Revoked access token: blacklist:{jti}"""
    return f"blacklist:{jti}"
