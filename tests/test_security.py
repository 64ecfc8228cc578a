"""
Unit tests for password hashing and token handling.
"""

import pytest
from jose import JWTError, jwt

from taskboard.core.config import settings
from taskboard.core.security import (
    TokenType,
    access_token_ttl_seconds,
    decode_token,
    hash_password,
    issue_token,
    verify_password,
)


def test_password_round_trip():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed) is True
    assert verify_password("wrong horse", hashed) is False


def test_issued_token_carries_subject_jti_and_type():
    token, jti = issue_token("user-1", TokenType.access)
    claims = decode_token(token, TokenType.access)

    assert claims["sub"] == "user-1"
    assert claims["jti"] == jti
    assert claims["type"] == "access"
    assert "role" not in claims
    assert claims["exp"] - claims["iat"] == access_token_ttl_seconds()


@pytest.mark.parametrize(
    "issued, expected",
    [(TokenType.access, TokenType.refresh), (TokenType.refresh, TokenType.access)],
)
def test_token_of_the_other_type_is_rejected(issued, expected):
    token, _ = issue_token("user-1", issued)
    with pytest.raises(JWTError):
        decode_token(token, expected)


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode(
        {"sub": "user-1", "jti": "x", "type": "access"},
        "another-secret-key-that-is-32-characters",
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(JWTError):
        decode_token(forged, TokenType.access)
