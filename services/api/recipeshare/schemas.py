"""Pydantic schemas for RecipeShare API.

Request/response models for:
- Auth sessions and profiles
- Recipes (ingredients, steps, feed rows)
- Comments
- Meal plans and plan items
- Shopping lists
"""

from datetime import datetime, date
from typing import Optional, Literal

from pydantic import BaseModel, Field


MealSlot = Literal["breakfast", "lunch", "dinner", "snack"]


# --- Auth / Profiles ---

class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=200)


class UserOut(BaseModel):
    id: str
    email: Optional[str]
    username: Optional[str]

    class Config:
        from_attributes = True


class SessionOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileUpsert(BaseModel):
    username: Optional[str] = Field(None, max_length=80)


class ProfileOut(UserOut):
    created_at: datetime


# --- Recipe Ingredient ---

class RecipeIngredientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=40)


class RecipeIngredientOut(BaseModel):
    id: str
    recipe_id: str
    name: str
    quantity: Optional[float]
    unit: Optional[str]

    class Config:
        from_attributes = True


# --- Recipe Step ---

class RecipeStepCreate(BaseModel):
    step_number: int = Field(..., ge=1)
    instruction: str = Field(..., min_length=1)


class RecipeStepOut(BaseModel):
    id: str
    recipe_id: str
    step_number: int
    instruction: str

    class Config:
        from_attributes = True


# --- Recipe ---

class RecipeCreate(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = None
    cuisine: Optional[str] = Field(None, max_length=80)
    tags: Optional[list[str]] = None
    prep_time_minutes: Optional[int] = Field(None, ge=0)
    cook_time_minutes: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    is_public: bool = True
    image_url: Optional[str] = Field(None, max_length=500)


class RecipeOut(BaseModel):
    id: str
    author_id: str
    title: str
    description: Optional[str]
    cuisine: Optional[str]
    tags: Optional[list[str]]
    prep_time_minutes: Optional[int]
    cook_time_minutes: Optional[int]
    total_time: Optional[int]
    servings: Optional[int]
    is_public: bool
    image_url: Optional[str]
    created_at: datetime
    ingredients: list[RecipeIngredientOut] = []
    steps: list[RecipeStepOut] = []

    class Config:
        from_attributes = True


class RecipeFeedRow(BaseModel):
    """One row of the search_recipes result, shaped for the feed."""
    recipe_id: str
    title: str
    description: Optional[str]
    image_url: Optional[str]
    cuisine: Optional[str]
    tags: Optional[list[str]]
    total_time: Optional[int]
    author_username: Optional[str]
    like_count: int
    comment_count: int
    is_liked: bool
    is_saved: bool
    created_at: datetime


# --- Remote procedures ---

class SearchRecipesRequest(BaseModel):
    search: Optional[str] = ""
    cuisine_filters: Optional[list[str]] = None
    max_total_time: Optional[int] = Field(None, ge=0)


class RecipeRef(BaseModel):
    p_recipe_id: str


class LikeToggleOut(BaseModel):
    recipe_id: str
    liked: bool
    like_count: int


class SaveToggleOut(BaseModel):
    recipe_id: str
    saved: bool
    save_count: int


class GenerateShoppingListRequest(BaseModel):
    p_meal_plan_id: str


# --- Comments ---

class CommentCreate(BaseModel):
    recipe_id: str
    content: str = Field(..., max_length=2000)


class CommentOut(BaseModel):
    id: str
    recipe_id: str
    user_id: str
    content: str
    created_at: datetime
    username: Optional[str] = None


# --- Meal Plans ---

class MealPlanCreate(BaseModel):
    # Optional so that missing fields produce the form message, not a 422
    title: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class MealPlanOut(BaseModel):
    id: str
    user_id: str
    title: str
    start_date: date
    end_date: date
    created_at: datetime

    class Config:
        from_attributes = True


class MealPlanItemCreate(BaseModel):
    meal_plan_id: Optional[str] = None
    recipe_id: Optional[str] = None
    scheduled_for: Optional[date] = None
    meal: MealSlot = "dinner"


class MealPlanItemOut(BaseModel):
    id: str
    meal_plan_id: str
    recipe_id: str
    scheduled_for: date
    meal: MealSlot
    recipe_title: Optional[str] = None


# --- Shopping Lists ---

class ShoppingListItemOut(BaseModel):
    id: str
    shopping_list_id: str
    ingredient: str
    quantity: Optional[float]
    unit: Optional[str]
    checked: bool

    class Config:
        from_attributes = True


class ShoppingListOut(BaseModel):
    id: str
    title: str
    status: Optional[str]
    generated_from_meal_plan: Optional[str]
    created_at: datetime
    items: list[ShoppingListItemOut] = []

    class Config:
        from_attributes = True


class ShoppingListItemUpdate(BaseModel):
    checked: bool


# --- Dev Seed ---

class SeedResponse(BaseModel):
    user: UserOut
    recipes_created: int
    message: str
