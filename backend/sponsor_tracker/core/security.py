# sponsor_tracker/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt, JWTError

from sponsor_tracker.core.config import require_jwt_secret, settings

ACCESS_PURPOSE = "access"


def create_access_token(email: str) -> str:
    """Signed access token for `Authorization: Bearer`; `sub` is the user's email."""
    require_jwt_secret()
    issued = datetime.now(timezone.utc)
    claims = {
        "sub": email,
        "purpose": ACCESS_PURPOSE,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    # Raises JWTError on a bad signature or an expired token.
    require_jwt_secret()
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def verify_token_purpose(token: str, expected_purpose: str = ACCESS_PURPOSE) -> dict[str, Any]:
    try:
        claims = decode_token(token)
    except JWTError:
        raise ValueError("Invalid or expired token")

    if claims.get("purpose") != expected_purpose:
        raise ValueError("Invalid token purpose")
    return claims
