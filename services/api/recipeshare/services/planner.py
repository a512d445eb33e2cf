"""Meal plans and scheduled meals."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core.errors import NotFoundError, ValidationFailed
from ..core.text import collapse_ws
from ..models import MEAL_SLOTS, MealPlan, MealPlanItem, Profile
from .catalog import get_visible_recipe

logger = logging.getLogger("recipeshare.planner")


def get_owned_plan(db: Session, plan_id: str, user: Profile) -> MealPlan:
    plan = db.get(MealPlan, plan_id)
    if not plan or plan.user_id != user.id:
        raise NotFoundError("Meal plan not found")
    return plan


def create_plan(
    db: Session,
    user: Profile,
    title: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
) -> MealPlan:
    title = collapse_ws(title or "")
    if not title or not start_date or not end_date:
        raise ValidationFailed("Fill title and dates")
    if end_date < start_date:
        raise ValidationFailed("End date must be on or after start date")

    plan = MealPlan(user_id=user.id, title=title, start_date=start_date, end_date=end_date)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    logger.info(f"Meal plan {plan.id} created ({start_date} -> {end_date})")
    return plan


def list_plans(db: Session, user: Profile) -> list[MealPlan]:
    return list(db.scalars(
        select(MealPlan)
        .where(MealPlan.user_id == user.id)
        .order_by(MealPlan.start_date.desc(), MealPlan.created_at.desc())
    ).all())


def _item_out(item: MealPlanItem) -> dict:
    return {
        "id": item.id,
        "meal_plan_id": item.meal_plan_id,
        "recipe_id": item.recipe_id,
        "scheduled_for": item.scheduled_for,
        "meal": item.meal,
        "recipe_title": item.recipe.title if item.recipe else None,
    }


def add_item(
    db: Session,
    user: Profile,
    meal_plan_id: Optional[str],
    recipe_id: Optional[str],
    scheduled_for: Optional[date],
    meal: str = "dinner",
) -> dict:
    if not meal_plan_id or not recipe_id or not scheduled_for:
        raise ValidationFailed("Choose plan, recipe, and date")
    if meal not in MEAL_SLOTS:
        raise ValidationFailed(f"Meal must be one of: {', '.join(MEAL_SLOTS)}")

    plan = get_owned_plan(db, meal_plan_id, user)
    recipe = get_visible_recipe(db, recipe_id, user.id)
    if not plan.covers(scheduled_for):
        raise ValidationFailed(
            f"Date {scheduled_for.isoformat()} is outside the plan "
            f"({plan.start_date.isoformat()} to {plan.end_date.isoformat()})"
        )

    item = MealPlanItem(
        meal_plan_id=plan.id,
        recipe_id=recipe.id,
        scheduled_for=scheduled_for,
        meal=meal,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return _item_out(item)


def list_items(db: Session, user: Profile, plan_ids: list[str]) -> list[dict]:
    """Items of the caller's plans among ``plan_ids``, earliest date first."""
    if not plan_ids:
        return []
    stmt = (
        select(MealPlanItem)
        .join(MealPlan, MealPlan.id == MealPlanItem.meal_plan_id)
        .options(selectinload(MealPlanItem.recipe))
        .where(MealPlanItem.meal_plan_id.in_(plan_ids), MealPlan.user_id == user.id)
        .order_by(MealPlanItem.scheduled_for.asc(), MealPlanItem.created_at.asc())
    )
    return [_item_out(item) for item in db.scalars(stmt).all()]
