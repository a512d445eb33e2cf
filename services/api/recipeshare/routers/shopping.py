from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_db
from ..services import shopping

router = APIRouter()


@router.get("/shopping-lists", response_model=list[schemas.ShoppingListOut])
def list_shopping_lists(
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return shopping.list_lists(db, user)


@router.patch("/shopping-list-items/{item_id}", response_model=schemas.ShoppingListItemOut)
def update_shopping_list_item(
    item_id: str,
    body: schemas.ShoppingListItemUpdate,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Toggle an item's checked flag. The list and its source plan are untouched."""
    return shopping.set_item_checked(db, user, item_id, body.checked)
