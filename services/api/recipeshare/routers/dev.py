"""Dev-only endpoints for seeding.

Endpoints:
- POST /api/dev/seed - Create the demo profile + sample recipes
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from ..db import get_db
from ..models import Profile, Recipe, RecipeIngredient, RecipeStep
from ..schemas import SeedResponse, UserOut
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("recipeshare.dev")


SEED_RECIPES = [
    {
        "title": "Weeknight Chickpea Curry",
        "description": "Pantry curry that comes together in half an hour.",
        "cuisine": "Indian",
        "tags": ["vegetarian", "quick"],
        "prep_time_minutes": 10,
        "cook_time_minutes": 20,
        "servings": 4,
        "ingredients": [
            {"name": "Chickpeas", "quantity": 2, "unit": "can"},
            {"name": "Coconut milk", "quantity": 400, "unit": "ml"},
            {"name": "Onion", "quantity": 1, "unit": None},
            {"name": "Garlic", "quantity": 3, "unit": "clove"},
            {"name": "Curry powder", "quantity": 2, "unit": "tbsp"},
        ],
        "steps": [
            "Soften the onion and garlic in a little oil.",
            "Stir in the curry powder and cook for a minute.",
            "Add chickpeas and coconut milk, simmer 15 minutes.",
        ],
    },
    {
        "title": "Lemon Garlic Pasta",
        "description": "Bright, fast pasta for two.",
        "cuisine": "Italian",
        "tags": ["pasta", "quick"],
        "prep_time_minutes": 5,
        "cook_time_minutes": 12,
        "servings": 2,
        "ingredients": [
            {"name": "Spaghetti", "quantity": 200, "unit": "g"},
            {"name": "Garlic", "quantity": 2, "unit": "clove"},
            {"name": "Lemon", "quantity": 1, "unit": None},
            {"name": "Olive oil", "quantity": 3, "unit": "tbsp"},
            {"name": "Parmesan", "quantity": None, "unit": None},
        ],
        "steps": [
            "Cook the spaghetti in salted water.",
            "Warm garlic in olive oil, add lemon zest and juice.",
            "Toss pasta with the sauce and parmesan.",
        ],
    },
    {
        "title": "Overnight Oats",
        "description": "Make-ahead breakfast.",
        "cuisine": "American",
        "tags": ["breakfast", "make-ahead"],
        "prep_time_minutes": 5,
        "cook_time_minutes": None,
        "servings": 1,
        "ingredients": [
            {"name": "Rolled oats", "quantity": 0.5, "unit": "cup"},
            {"name": "Milk", "quantity": 0.5, "unit": "cup"},
            {"name": "Honey", "quantity": 1, "unit": "tsp"},
        ],
        "steps": [
            "Stir everything together in a jar.",
            "Refrigerate overnight.",
        ],
    },
]


@router.post("/dev/seed", response_model=SeedResponse)
def seed_dev_data(db: Session = Depends(get_db)):
    """Create or reuse the demo profile and its sample recipes.

    Idempotent: running it again creates nothing new.
    """
    email = settings.dev_seed_email.lower()
    profile = db.query(Profile).filter(Profile.email == email).first()

    if not profile:
        profile = Profile(
            email=email,
            username=email.split("@")[0],
            password_hash=generate_password_hash(settings.dev_seed_password) if settings.dev_seed_password else None,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)

    created_count = 0
    for recipe_data in SEED_RECIPES:
        existing = (
            db.query(Recipe)
            .filter(Recipe.author_id == profile.id, Recipe.title == recipe_data["title"])
            .first()
        )
        if existing:
            continue

        recipe = Recipe(
            author_id=profile.id,
            title=recipe_data["title"],
            description=recipe_data["description"],
            cuisine=recipe_data["cuisine"],
            tags=recipe_data["tags"],
            prep_time_minutes=recipe_data["prep_time_minutes"],
            cook_time_minutes=recipe_data["cook_time_minutes"],
            servings=recipe_data["servings"],
            is_public=True,
        )
        db.add(recipe)
        db.flush()

        for ing_data in recipe_data["ingredients"]:
            db.add(RecipeIngredient(recipe_id=recipe.id, **ing_data))
        for number, instruction in enumerate(recipe_data["steps"], start=1):
            db.add(RecipeStep(recipe_id=recipe.id, step_number=number, instruction=instruction))

        created_count += 1

    db.commit()
    logger.info(f"Dev seed: {created_count} recipes created for {profile.id}")

    return SeedResponse(
        user=UserOut.model_validate(profile),
        recipes_created=created_count,
        message=f"Created {created_count} recipes" if created_count else "All sample recipes already exist",
    )
