"""Recipe endpoints.

Endpoints:
- POST /api/recipes                   - create a recipe (caller is the author)
- GET  /api/recipes/{id}              - recipe with ingredients and ordered steps
- POST /api/recipes/{id}/ingredients  - bulk insert ingredient lines
- POST /api/recipes/{id}/steps        - bulk insert steps
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_current_user_optional, get_db
from ..services import catalog

router = APIRouter()


@router.post("/recipes", response_model=schemas.RecipeOut, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe: schemas.RecipeCreate,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog.create_recipe(db, user, recipe)


@router.get("/recipes/{recipe_id}", response_model=schemas.RecipeOut)
def get_recipe(
    recipe_id: str,
    user: Optional[models.Profile] = Depends(get_current_user_optional),
    db: Session = Depends(get_db),
):
    return catalog.get_visible_recipe(db, recipe_id, user.id if user else None)


@router.post(
    "/recipes/{recipe_id}/ingredients",
    response_model=list[schemas.RecipeIngredientOut],
    status_code=status.HTTP_201_CREATED,
)
def add_ingredients(
    recipe_id: str,
    lines: list[schemas.RecipeIngredientCreate],
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog.add_ingredients(db, user, recipe_id, lines)


@router.post(
    "/recipes/{recipe_id}/steps",
    response_model=list[schemas.RecipeStepOut],
    status_code=status.HTTP_201_CREATED,
)
def add_steps(
    recipe_id: str,
    steps: list[schemas.RecipeStepCreate],
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return catalog.add_steps(db, user, recipe_id, steps)
