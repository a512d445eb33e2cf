"""Recipe catalog: recipe rows, feed search, likes and saves."""

import logging
from typing import Optional, Iterable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, PermissionDeniedError, ValidationFailed
from ..core.text import blank_to_none, collapse_ws, normalize_tags
from ..models import (
    Comment,
    Profile,
    Recipe,
    RecipeIngredient,
    RecipeLike,
    RecipeSave,
    RecipeStep,
)
from ..schemas import RecipeCreate, RecipeIngredientCreate, RecipeStepCreate

logger = logging.getLogger("recipeshare.catalog")


def visible_filter(viewer_id: Optional[str]):
    """Public recipes plus the viewer's own."""
    if viewer_id is None:
        return Recipe.is_public.is_(True)
    return or_(Recipe.is_public.is_(True), Recipe.author_id == viewer_id)


def get_visible_recipe(db: Session, recipe_id: str, viewer_id: Optional[str]) -> Recipe:
    recipe = db.get(Recipe, recipe_id)
    if not recipe or not recipe.visible_to(viewer_id):
        raise NotFoundError("Recipe not found")
    return recipe


def _get_owned_recipe(db: Session, recipe_id: str, author: Profile, what: str) -> Recipe:
    recipe = get_visible_recipe(db, recipe_id, author.id)
    if recipe.author_id != author.id:
        raise PermissionDeniedError(f"Only the author can add {what}")
    return recipe


# --- Recipe rows ---

def create_recipe(db: Session, author: Profile, payload: RecipeCreate) -> Recipe:
    title = (payload.title or "").strip()
    if not title:
        raise ValidationFailed("Title is required")

    recipe = Recipe(
        author_id=author.id,
        title=title,
        description=(payload.description or "").strip(),
        cuisine=blank_to_none(payload.cuisine),
        tags=normalize_tags(payload.tags),
        prep_time_minutes=payload.prep_time_minutes,
        cook_time_minutes=payload.cook_time_minutes,
        servings=payload.servings,
        is_public=payload.is_public,
        image_url=blank_to_none(payload.image_url),
    )
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    logger.info(f"Recipe {recipe.id} created by {author.id}")
    return recipe


def add_ingredients(
    db: Session, author: Profile, recipe_id: str, lines: Iterable[RecipeIngredientCreate]
) -> list[RecipeIngredient]:
    """Insert ingredient lines for a recipe in one transaction."""
    recipe = _get_owned_recipe(db, recipe_id, author, "ingredients")

    rows = []
    for line in lines:
        name = collapse_ws(line.name)
        if not name:
            raise ValidationFailed("Ingredient name is required")
        rows.append(RecipeIngredient(
            recipe_id=recipe.id,
            name=name,
            quantity=line.quantity,
            unit=blank_to_none(line.unit),
        ))

    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def add_steps(
    db: Session, author: Profile, recipe_id: str, steps: Iterable[RecipeStepCreate]
) -> list[RecipeStep]:
    recipe = _get_owned_recipe(db, recipe_id, author, "steps")

    taken = {s.step_number for s in recipe.steps}
    rows = []
    for step in steps:
        instruction = step.instruction.strip()
        if not instruction:
            raise ValidationFailed(f"Step {step.step_number} has no instruction")
        if step.step_number in taken:
            raise ValidationFailed(f"Step {step.step_number} already exists for this recipe")
        taken.add(step.step_number)
        rows.append(RecipeStep(
            recipe_id=recipe.id,
            step_number=step.step_number,
            instruction=instruction,
        ))

    try:
        db.add_all(rows)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailed("Duplicate step number for this recipe")
    for row in rows:
        db.refresh(row)
    return sorted(rows, key=lambda r: r.step_number)


# --- search_recipes ---

def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _tag_match(db: Session, pattern: str):
    """EXISTS over the recipe's tag array, matching one tag at a time."""
    if db.get_bind().dialect.name == "postgresql":
        tag_values = func.json_array_elements_text(Recipe.tags).table_valued("value")
    else:
        tag_values = func.json_each(Recipe.tags).table_valued("value")
    return (
        select(tag_values.c.value)
        .where(tag_values.c.value.ilike(pattern, escape="\\"))
        .exists()
    )


def search_recipes(
    db: Session,
    viewer_id: Optional[str],
    search: Optional[str] = None,
    cuisine_filters: Optional[list[str]] = None,
    max_total_time: Optional[int] = None,
    limit: int = 50,
) -> list[dict]:
    """Filter the visible recipes and shape them as feed rows, newest first."""
    like_count = (
        select(func.count(RecipeLike.id))
        .where(RecipeLike.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
    )
    comment_count = (
        select(func.count(Comment.id))
        .where(Comment.recipe_id == Recipe.id)
        .correlate(Recipe)
        .scalar_subquery()
    )

    stmt = (
        select(Recipe, Profile.username, like_count.label("like_count"), comment_count.label("comment_count"))
        .outerjoin(Profile, Profile.id == Recipe.author_id)
        .where(visible_filter(viewer_id))
    )

    term = collapse_ws(search or "")
    if term:
        pattern = f"%{_escape_like(term)}%"
        ingredient_hit = select(RecipeIngredient.recipe_id).where(
            RecipeIngredient.name.ilike(pattern, escape="\\")
        )
        stmt = stmt.where(or_(
            Recipe.title.ilike(pattern, escape="\\"),
            Recipe.description.ilike(pattern, escape="\\"),
            Recipe.cuisine.ilike(pattern, escape="\\"),
            _tag_match(db, pattern),
            Recipe.id.in_(ingredient_hit),
        ))

    cuisines = [c.strip().lower() for c in (cuisine_filters or []) if c and c.strip()]
    if cuisines:
        stmt = stmt.where(func.lower(Recipe.cuisine).in_(cuisines))

    if max_total_time is not None:
        total = func.coalesce(Recipe.prep_time_minutes, 0) + func.coalesce(Recipe.cook_time_minutes, 0)
        stmt = stmt.where(and_(
            or_(Recipe.prep_time_minutes.is_not(None), Recipe.cook_time_minutes.is_not(None)),
            total <= max_total_time,
        ))

    stmt = stmt.order_by(Recipe.created_at.desc(), Recipe.id).limit(limit)
    results = db.execute(stmt).all()

    recipe_ids = [r.Recipe.id for r in results]
    liked_ids: set[str] = set()
    saved_ids: set[str] = set()
    if viewer_id and recipe_ids:
        liked_ids = set(db.scalars(
            select(RecipeLike.recipe_id).where(
                RecipeLike.user_id == viewer_id, RecipeLike.recipe_id.in_(recipe_ids)
            )
        ).all())
        saved_ids = set(db.scalars(
            select(RecipeSave.recipe_id).where(
                RecipeSave.user_id == viewer_id, RecipeSave.recipe_id.in_(recipe_ids)
            )
        ).all())

    rows = []
    for r in results:
        recipe = r.Recipe
        rows.append({
            "recipe_id": recipe.id,
            "title": recipe.title,
            "description": recipe.description,
            "image_url": recipe.image_url,
            "cuisine": recipe.cuisine,
            "tags": recipe.tags,
            "total_time": recipe.total_time,
            "author_username": r.username,
            "like_count": int(r.like_count or 0),
            "comment_count": int(r.comment_count or 0),
            "is_liked": recipe.id in liked_ids,
            "is_saved": recipe.id in saved_ids,
            "created_at": recipe.created_at,
        })
    return rows


# --- toggle_like / toggle_save ---

def _toggle(db: Session, model, user: Profile, recipe_id: str) -> bool:
    """Flip the (user, recipe) row of ``model``; True when it now exists."""
    get_visible_recipe(db, recipe_id, user.id)

    existing = db.query(model).filter(
        model.user_id == user.id, model.recipe_id == recipe_id
    ).first()
    if existing:
        db.delete(existing)
        db.commit()
        return False

    try:
        db.add(model(user_id=user.id, recipe_id=recipe_id))
        db.commit()
    except IntegrityError:
        # Another request inserted the same pair first; it is set either way
        db.rollback()
    return True


def _count(db: Session, model, recipe_id: str) -> int:
    return db.scalar(select(func.count(model.id)).where(model.recipe_id == recipe_id)) or 0


def toggle_like(db: Session, user: Profile, recipe_id: str) -> dict:
    liked = _toggle(db, RecipeLike, user, recipe_id)
    return {"recipe_id": recipe_id, "liked": liked, "like_count": _count(db, RecipeLike, recipe_id)}


def toggle_save(db: Session, user: Profile, recipe_id: str) -> dict:
    saved = _toggle(db, RecipeSave, user, recipe_id)
    return {"recipe_id": recipe_id, "saved": saved, "save_count": _count(db, RecipeSave, recipe_id)}
