"""FastAPI dependencies for RecipeShare API.

Provides:
- Database session dependency
- Bearer token extraction and caller resolution
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .core.errors import AuthError
from .db import get_db
from .infra.sessions import resolve_session
from .models import Profile

__all__ = ["get_db", "get_access_token", "get_current_user", "get_current_user_optional"]


def get_access_token(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[str]:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_optional(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_access_token),
) -> Optional[Profile]:
    """Resolve the caller, or None for anonymous requests.

    A token whose profile no longer exists counts as anonymous.
    """
    user_id = resolve_session(token)
    if not user_id:
        return None
    return db.get(Profile, user_id)


def get_current_user(
    user: Optional[Profile] = Depends(get_current_user_optional),
) -> Profile:
    if user is None:
        raise AuthError("Not authenticated")
    return user
