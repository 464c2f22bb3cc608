"""
Security Service

Handles the login credential check and JWT token operations.

Security Features:
==================
1. JWT token generation and validation (python-jose, HS256)
2. Tokens carry the user's username and id and expire after
   settings.access_token_expire_minutes

NOTE: There is no per-user password. Every user logs in with the shared
DEMO_PASSWORD. This is a placeholder for a real credential store and is
not meant for production use.

Usage:
    from library_api.services.security import create_user_token, verify_token_type

    token = create_user_token(user)
    payload = verify_token_type(token, "access")
    payload["username"]
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError, jwt

from library_api.config import get_settings

if TYPE_CHECKING:
    from library_api.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Credential Check
# -------------------------------------------------------------------------
DEMO_PASSWORD = "secret"


def check_password(password: str) -> bool:
    """
    Check a login password.

    Accepts only the shared DEMO_PASSWORD.
    """
    return password == DEMO_PASSWORD


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token({"sub": "1"})
        >>> token.count(".") == 2  # JWT format: header.payload.signature
        True
    """
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(UTC) + expires_delta

    to_encode.update({"exp": expire, "type": ACCESS_TOKEN_TYPE})

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def create_user_token(user: "User", expires_delta: timedelta | None = None) -> str:
    """
    Create the login token of a user.

    The payload embeds the username and id; the id is what the request
    context uses to load the current user.
    """
    return create_access_token(
        {"sub": str(user.id), "username": user.username, "id": user.id},
        expires_delta=expires_delta,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token string

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def verify_token_type(token: str, expected_type: str) -> dict | None:
    """
    Decode a token and verify its type.

    Args:
        token: The JWT token string
        expected_type: Expected token type ("access")

    Returns:
        Decoded payload if valid and correct type, None otherwise
    """
    payload = decode_token(token)

    if payload is None:
        return None

    if payload.get("type") != expected_type:
        logger.warning(f"Token type mismatch: expected {expected_type}")
        return None

    return payload
