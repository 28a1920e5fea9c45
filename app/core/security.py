"""
Security utilities for session credentials.

Admin sessions are carried as signed JWT access tokens (issued by the login
service, which is out of scope here). This module provides:
- Access token generation (used by the login service and tests)
- Access token verification
"""

from datetime import UTC, datetime, timedelta

import jwt

from app.config import settings


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: The opaque user ID to encode in the token
        expires_delta: Optional custom expiration time (defaults to settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    expire = datetime.now(UTC) + expires_delta

    payload = {
        "sub": user_id,  # "sub" (subject) is standard JWT claim
        "exp": expire,  # "exp" (expiration) is standard JWT claim
        "type": "access",  # Custom claim to distinguish token types
    }

    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> str | None:
    """
    Verify and decode a JWT access token.

    Args:
        token: The JWT token to verify

    Returns:
        User ID if token is valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": True, "verify_signature": True},
        )
    except jwt.PyJWTError:
        # Expired, bad signature, or malformed
        return None

    if payload.get("type") != "access":
        return None

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        return None

    return user_id
