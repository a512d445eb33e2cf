"""Sign-up, sign-in and profile upkeep."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from ..core.errors import ValidationFailed
from ..core.text import collapse_ws
from ..infra.sessions import create_session, revoke_session
from ..models import Profile

logger = logging.getLogger("recipeshare.identity")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def default_username(profile: Profile) -> str:
    """Email local part, or the first 8 chars of the id when there is no email."""
    if profile.email:
        return profile.email.split("@")[0]
    return profile.id[:8]


def sign_up(db: Session, email: str, password: str) -> tuple[Profile, str]:
    """Create a profile and open a session for it."""
    email = _normalize_email(email)
    existing = db.query(Profile).filter(Profile.email == email).first()
    if existing:
        raise ValidationFailed("User already registered")

    profile = Profile(email=email, password_hash=generate_password_hash(password))
    profile.username = email.split("@")[0]
    try:
        db.add(profile)
        db.commit()
    except IntegrityError:
        # Concurrent sign-up with the same email
        db.rollback()
        raise ValidationFailed("User already registered")
    db.refresh(profile)

    logger.info(f"Profile created: {profile.id}")
    return profile, create_session(profile.id)


def sign_in(db: Session, email: str, password: str) -> tuple[Profile, str]:
    profile = db.query(Profile).filter(Profile.email == _normalize_email(email)).first()
    if not profile or not profile.password_hash or not check_password_hash(profile.password_hash, password):
        raise ValidationFailed("Invalid login credentials")
    return profile, create_session(profile.id)


def sign_out(token: Optional[str]) -> None:
    revoke_session(token)


def ensure_profile(db: Session, profile: Profile, username: Optional[str] = None) -> Profile:
    """Set the caller's username, falling back to the default one."""
    name = collapse_ws(username or "") or default_username(profile)
    if profile.username != name:
        profile.username = name
        db.commit()
        db.refresh(profile)
    return profile
