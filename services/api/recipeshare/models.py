"""SQLAlchemy ORM models for RecipeShare.

Tables:
- profiles: Users with credentials and a public username
- recipes: Shared recipes (public or author-only)
- recipe_ingredients / recipe_steps: Immutable recipe content rows
- recipe_likes / recipe_saves: One row per (user, recipe) toggle
- comments: Feed comments on recipes
- meal_plans / meal_plan_items: Dated plans with meal slots
- shopping_lists / shopping_list_items: Lists generated from plans
"""

from __future__ import annotations

import uuid
from datetime import datetime, date, timezone
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Date,
    Text,
    Integer,
    Boolean,
    ForeignKey,
    Index,
    Numeric,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, false, true
from sqlalchemy.types import JSON

from .db import Base


MEAL_SLOTS = ("breakfast", "lunch", "dinner", "snack")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """A signed-up user.

    The username is what the feed shows next to recipes and comments.
    """
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    email: Mapped[Optional[str]] = mapped_column(String(320), unique=True, nullable=True)
    username: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    recipes: Mapped[list["Recipe"]] = relationship("Recipe", back_populates="author")


class Recipe(Base):
    """Recipe authored by a profile."""
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_author_id", "author_id"),
        Index("ix_recipes_public_created", "is_public", "created_at"),
        CheckConstraint("prep_time_minutes IS NULL OR prep_time_minutes >= 0", name="ck_recipes_prep_nonneg"),
        CheckConstraint("cook_time_minutes IS NULL OR cook_time_minutes >= 0", name="ck_recipes_cook_nonneg"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cuisine: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    tags: Mapped[Optional[list[str]]] = mapped_column(JSON(none_as_null=True), nullable=True)

    prep_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cook_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true(), default=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    # Relationships
    author: Mapped["Profile"] = relationship("Profile", back_populates="recipes")
    ingredients: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    steps: Mapped[list["RecipeStep"]] = relationship(
        "RecipeStep", back_populates="recipe", cascade="all, delete-orphan",
        order_by="RecipeStep.step_number"
    )

    @property
    def total_time(self) -> Optional[int]:
        """Prep plus cook minutes; None when neither is known."""
        if self.prep_time_minutes is None and self.cook_time_minutes is None:
            return None
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)

    def visible_to(self, user_id: Optional[str]) -> bool:
        return self.is_public or (user_id is not None and self.author_id == user_id)


class RecipeIngredient(Base):
    """Ingredient line for a recipe."""
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        Index("ix_recipe_ingredients_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[Optional[float]] = mapped_column(Numeric(12, 3), nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredients")


class RecipeStep(Base):
    """Numbered instruction within a recipe."""
    __tablename__ = "recipe_steps"
    __table_args__ = (
        Index("ix_recipe_steps_recipe_id", "recipe_id"),
        UniqueConstraint("recipe_id", "step_number", name="uq_recipe_steps_number"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )

    step_number: Mapped[int] = mapped_column(Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)

    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="steps")


class RecipeLike(Base):
    __tablename__ = "recipe_likes"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_recipe_likes_user_recipe"),
        Index("ix_recipe_likes_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), default=utcnow)


class RecipeSave(Base):
    __tablename__ = "recipe_saves"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_recipe_saves_user_recipe"),
        Index("ix_recipe_saves_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), default=utcnow)


class Comment(Base):
    """Comment left on a recipe in the feed."""
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_recipe_created", "recipe_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    recipe_id: Mapped[str] = mapped_column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    author: Mapped["Profile"] = relationship("Profile")


class MealPlan(Base):
    """Dated meal plan covering start_date..end_date inclusive."""
    __tablename__ = "meal_plans"
    __table_args__ = (
        Index("ix_meal_plans_user_start", "user_id", "start_date"),
        CheckConstraint("end_date >= start_date", name="ck_meal_plans_date_range"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    items: Mapped[list["MealPlanItem"]] = relationship(
        "MealPlanItem", back_populates="meal_plan", cascade="all, delete-orphan",
        order_by="[MealPlanItem.scheduled_for, MealPlanItem.created_at]"
    )

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class MealPlanItem(Base):
    """A recipe scheduled on a date for one meal slot."""
    __tablename__ = "meal_plan_items"
    __table_args__ = (
        Index("ix_meal_plan_items_plan_date", "meal_plan_id", "scheduled_for"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    meal_plan_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    scheduled_for: Mapped[date] = mapped_column(Date, nullable=False)
    meal: Mapped[str] = mapped_column(String(20), nullable=False)  # breakfast | lunch | dinner | snack

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    meal_plan: Mapped["MealPlan"] = relationship("MealPlan", back_populates="items")
    recipe: Mapped["Recipe"] = relationship("Recipe")


class ShoppingList(Base):
    """Shopping list, usually generated from a meal plan."""
    __tablename__ = "shopping_lists"
    __table_args__ = (
        Index("ix_shopping_lists_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, default="draft")
    generated_from_meal_plan: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("meal_plans.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=utcnow
    )

    items: Mapped[list["ShoppingListItem"]] = relationship(
        "ShoppingListItem", back_populates="shopping_list", cascade="all, delete-orphan",
        order_by="ShoppingListItem.position"
    )


class ShoppingListItem(Base):
    """Line on a shopping list. `checked` is owned by the user."""
    __tablename__ = "shopping_list_items"
    __table_args__ = (
        Index("ix_shopping_list_items_list_id", "shopping_list_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    shopping_list_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False
    )

    ingredient: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[Optional[float]] = mapped_column(Numeric(12, 2), nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    checked: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false(), default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    shopping_list: Mapped["ShoppingList"] = relationship("ShoppingList", back_populates="items")
