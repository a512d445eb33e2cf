from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_current_user_optional, get_db
from ..services import comments

router = APIRouter()


@router.get("/comments", response_model=list[schemas.CommentOut])
def list_comments(
    recipe_id: list[str] = Query(default=[]),
    user: Optional[models.Profile] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    """Comments for one or more recipes (repeat ``recipe_id``), newest first."""
    return comments.list_comments(db, user.id if user else None, recipe_id)


@router.post("/comments", response_model=schemas.CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    body: schemas.CommentCreate,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return comments.create_comment(db, user, body.recipe_id, body.content)
