"""Shopping lists and generation from meal plans.

Consolidation rule used by generate_from_plan:
- every scheduled meal contributes its recipe's ingredient lines once
- lines merge when case-folded name and canonical unit both match
- quantities of a merged group are summed; a group with no quantities at
  all keeps quantity None
- no conversion between different units
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core.errors import NotFoundError
from ..models import (
    MealPlanItem,
    Profile,
    Recipe,
    ShoppingList,
    ShoppingListItem,
)
from .ingredient_normalize import display_name, normalize_name_key, normalize_unit
from .planner import get_owned_plan

logger = logging.getLogger("recipeshare.shopping")

DEFAULT_STATUS = "draft"


def aggregate_ingredients(lines: Iterable[tuple[str, Optional[float], Optional[str]]]) -> list[dict]:
    """Merge (name, quantity, unit) lines into shopping rows.

    Rows come back ordered by name key then unit, each as
    {"ingredient", "quantity", "unit"}.
    """
    aggregated: dict[tuple[str, str], dict] = {}

    for name, quantity, unit in lines:
        key = normalize_name_key(name)
        if not key:
            continue
        norm_unit = normalize_unit(unit)
        group_key = (key, norm_unit or "")

        if group_key not in aggregated:
            aggregated[group_key] = {
                "ingredient": display_name(name),
                "quantity": None,
                "unit": norm_unit,
            }
        agg = aggregated[group_key]
        if quantity is not None:
            agg["quantity"] = (agg["quantity"] or 0.0) + float(quantity)

    rows = []
    for group_key in sorted(aggregated):
        row = aggregated[group_key]
        if row["quantity"] is not None:
            row["quantity"] = round(row["quantity"], 2)
        rows.append(row)
    return rows


def generate_from_plan(db: Session, user: Profile, plan_id: str) -> ShoppingList:
    """Build and persist a shopping list from every meal scheduled in a plan."""
    plan = get_owned_plan(db, plan_id, user)

    items = db.scalars(
        select(MealPlanItem)
        .options(selectinload(MealPlanItem.recipe).selectinload(Recipe.ingredients))
        .where(MealPlanItem.meal_plan_id == plan.id)
        .order_by(MealPlanItem.scheduled_for, MealPlanItem.created_at)
    ).all()

    lines = []
    for item in items:
        if not item.recipe:
            continue
        for ing in item.recipe.ingredients:
            lines.append((ing.name, ing.quantity, ing.unit))

    rows = aggregate_ingredients(lines)

    shopping_list = ShoppingList(
        user_id=user.id,
        title=f"Shopping list: {plan.title}",
        status=DEFAULT_STATUS,
        generated_from_meal_plan=plan.id,
    )
    db.add(shopping_list)
    db.flush()

    db.add_all([
        ShoppingListItem(
            shopping_list_id=shopping_list.id,
            ingredient=row["ingredient"],
            quantity=row["quantity"],
            unit=row["unit"],
            checked=False,
            position=position,
        )
        for position, row in enumerate(rows)
    ])
    db.commit()
    db.refresh(shopping_list)

    logger.info(
        f"Shopping list {shopping_list.id} generated from plan {plan.id}: "
        f"{len(items)} meals, {len(lines)} lines, {len(rows)} items"
    )
    return shopping_list


def list_lists(db: Session, user: Profile) -> list[ShoppingList]:
    return list(db.scalars(
        select(ShoppingList)
        .options(selectinload(ShoppingList.items))
        .where(ShoppingList.user_id == user.id)
        .order_by(ShoppingList.created_at.desc(), ShoppingList.id)
    ).all())


def set_item_checked(db: Session, user: Profile, item_id: str, checked: bool) -> ShoppingListItem:
    """Set one item's checked flag. Nothing else is touched."""
    item = db.query(ShoppingListItem).join(ShoppingList).filter(
        ShoppingListItem.id == item_id,
        ShoppingList.user_id == user.id,
    ).first()
    if not item:
        raise NotFoundError("Shopping list item not found")

    item.checked = checked
    db.commit()
    db.refresh(item)
    return item
