from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import ValidationFailed
from ..models import Comment, Profile, Recipe
from .catalog import get_visible_recipe, visible_filter


def _to_out(comment: Comment, username: Optional[str]) -> dict:
    return {
        "id": comment.id,
        "recipe_id": comment.recipe_id,
        "user_id": comment.user_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "username": username,
    }


def list_comments(db: Session, viewer_id: Optional[str], recipe_ids: list[str]) -> list[dict]:
    """Comments for the given recipes, newest first, with author usernames."""
    if not recipe_ids:
        return []
    stmt = (
        select(Comment, Profile.username)
        .join(Recipe, Recipe.id == Comment.recipe_id)
        .outerjoin(Profile, Profile.id == Comment.user_id)
        .where(Comment.recipe_id.in_(recipe_ids), visible_filter(viewer_id))
        .order_by(Comment.created_at.desc(), Comment.id)
    )
    return [_to_out(row.Comment, row.username) for row in db.execute(stmt).all()]


def create_comment(db: Session, author: Profile, recipe_id: str, content: str) -> dict:
    text = (content or "").strip()
    if not text:
        raise ValidationFailed("Comment cannot be empty")
    get_visible_recipe(db, recipe_id, author.id)

    comment = Comment(recipe_id=recipe_id, user_id=author.id, content=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return _to_out(comment, author.username)
