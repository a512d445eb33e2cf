"""Session endpoints.

Endpoints:
- POST /api/auth/signup  - create an account and open a session
- POST /api/auth/signin  - open a session with email + password
- POST /api/auth/signout - revoke the bearer token
- GET  /api/auth/session - current session and user
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.rate_limit import limiter
from ..deps import get_access_token, get_current_user, get_db
from ..services import identity
from ..settings import settings

router = APIRouter()


@router.post("/auth/signup", response_model=schemas.SessionOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.auth_rate_limit)
def signup(
    request: Request,
    body: schemas.Credentials,
    db: Session = Depends(get_db),
):
    profile, token = identity.sign_up(db, body.email, body.password)
    return schemas.SessionOut(access_token=token, user=schemas.UserOut.model_validate(profile))


@router.post("/auth/signin", response_model=schemas.SessionOut)
@limiter.limit(settings.auth_rate_limit)
def signin(
    request: Request,
    body: schemas.Credentials,
    db: Session = Depends(get_db),
):
    profile, token = identity.sign_in(db, body.email, body.password)
    return schemas.SessionOut(access_token=token, user=schemas.UserOut.model_validate(profile))


@router.post("/auth/signout", status_code=status.HTTP_204_NO_CONTENT)
def signout(token: Optional[str] = Depends(get_access_token)):
    identity.sign_out(token)


@router.get("/auth/session", response_model=schemas.SessionOut)
def get_session(
    token: Optional[str] = Depends(get_access_token),
    user: models.Profile = Depends(get_current_user),
):
    return schemas.SessionOut(access_token=token, user=schemas.UserOut.model_validate(user))
