"""Named remote procedures.

Endpoints:
- POST /api/rpc/search_recipes                        - feed search
- POST /api/rpc/toggle_like                           - like / unlike
- POST /api/rpc/toggle_save                           - save / unsave
- POST /api/rpc/generate_shopping_list_from_meal_plan - plan -> shopping list
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_current_user_optional, get_db
from ..infra.idempotency import (
    idempotency_clear_key,
    idempotency_precheck,
    idempotency_store_result,
)
from ..services import catalog, shopping
from ..settings import settings

router = APIRouter(prefix="/rpc")


@router.post("/search_recipes", response_model=list[schemas.RecipeFeedRow])
def search_recipes(
    body: schemas.SearchRecipesRequest,
    user: Optional[models.Profile] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    return catalog.search_recipes(
        db,
        user.id if user else None,
        search=body.search,
        cuisine_filters=body.cuisine_filters,
        max_total_time=body.max_total_time,
        limit=settings.feed_page_size,
    )


@router.post("/toggle_like", response_model=schemas.LikeToggleOut)
def toggle_like(
    body: schemas.RecipeRef,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog.toggle_like(db, user, body.p_recipe_id)


@router.post("/toggle_save", response_model=schemas.SaveToggleOut)
def toggle_save(
    body: schemas.RecipeRef,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog.toggle_save(db, user, body.p_recipe_id)


@router.post("/generate_shopping_list_from_meal_plan", response_model=schemas.ShoppingListOut)
async def generate_shopping_list_from_meal_plan(
    request: Request,
    body: schemas.GenerateShoppingListRequest,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Aggregate a plan's ingredients into a new shopping list.

    An Idempotency-Key header makes retries return the first list instead of
    generating another one.
    """
    pre = await idempotency_precheck(request, user_id=user.id, route_key="generate_shopping_list")
    if isinstance(pre, JSONResponse):
        return pre

    try:
        shopping_list = shopping.generate_from_plan(db, user, body.p_meal_plan_id)
        resp = schemas.ShoppingListOut.model_validate(shopping_list)
    except Exception:
        if pre:
            await idempotency_clear_key(pre[0])
        raise

    if pre:
        redis_key, req_hash, _ = pre
        await idempotency_store_result(redis_key, req_hash, status=200, body=resp.model_dump(mode="json"))
    return resp
