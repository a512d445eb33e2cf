from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_current_user, get_db
from ..services import planner

router = APIRouter()


@router.post("/meal-plans", response_model=schemas.MealPlanOut, status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    body: schemas.MealPlanCreate,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return planner.create_plan(db, user, body.title, body.start_date, body.end_date)


@router.get("/meal-plans", response_model=list[schemas.MealPlanOut])
def list_meal_plans(
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return planner.list_plans(db, user)


@router.post("/meal-plan-items", response_model=schemas.MealPlanItemOut, status_code=status.HTTP_201_CREATED)
def add_meal_plan_item(
    body: schemas.MealPlanItemCreate,
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return planner.add_item(db, user, body.meal_plan_id, body.recipe_id, body.scheduled_for, body.meal)


@router.get("/meal-plan-items", response_model=list[schemas.MealPlanItemOut])
def list_meal_plan_items(
    meal_plan_id: list[str] = Query(default=[]),
    user: models.Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return planner.list_items(db, user, meal_plan_id)
