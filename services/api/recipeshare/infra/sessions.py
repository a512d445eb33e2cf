"""Opaque bearer-token sessions kept in Redis.

Key layout: ``<session_key_prefix>:<token>`` -> profile id, expiring after
``session_ttl_seconds``.
"""

import logging
import secrets
from typing import Optional

from recipeshare.infra.redis_client import get_sync_redis
from recipeshare.settings import settings

logger = logging.getLogger("recipeshare.sessions")

TOKEN_BYTES = 32


def _session_key(token: str) -> str:
    return f"{settings.session_key_prefix}:{token}"


def create_session(user_id: str) -> str:
    token = secrets.token_urlsafe(TOKEN_BYTES)
    r = get_sync_redis()
    r.set(_session_key(token), user_id, ex=settings.session_ttl_seconds)
    logger.info(f"Session issued for user {user_id}")
    return token


def resolve_session(token: Optional[str]) -> Optional[str]:
    """Return the profile id bound to ``token``, or None if unknown/expired."""
    if not token:
        return None
    r = get_sync_redis()
    return r.get(_session_key(token))


def revoke_session(token: Optional[str]) -> bool:
    if not token:
        return False
    r = get_sync_redis()
    return bool(r.delete(_session_key(token)))
