from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_db
from ..services.identity import ensure_profile

router = APIRouter()


@router.put("/profiles", response_model=schemas.ProfileOut)
def upsert_profile(
    body: schemas.ProfileUpsert,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Upsert the caller's username (defaults to the email local part)."""
    return ensure_profile(db, user, body.username)


@router.get("/profiles/me", response_model=schemas.ProfileOut)
def get_my_profile(user: models.Profile = Depends(get_current_user)):
    return user
