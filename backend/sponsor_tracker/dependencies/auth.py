# sponsor_tracker/dependencies/auth.py
from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sponsor_tracker.core.security import ACCESS_PURPOSE, verify_token_purpose
from sponsor_tracker.core.database import get_db
from sponsor_tracker.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user. Every failure is a 401
    carrying `WWW-Authenticate: Bearer`.
    """
    if creds is None:
        raise _unauthorized("Missing Authorization header")

    try:
        payload = verify_token_purpose(creds.credentials, ACCESS_PURPOSE)
    except ValueError:
        raise _unauthorized("Invalid or expired token")

    email = str(payload.get("sub") or "").strip().lower()
    if not email:
        raise _unauthorized("Invalid or expired token")

    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("User is inactive")

    return user
