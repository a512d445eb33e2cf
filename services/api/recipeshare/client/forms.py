"""Form parsing for the recipe editor.

Turns raw form strings into the payloads the API accepts:
- tags: comma separated, blanks dropped
- numbers: blank -> None
- ingredient rows: rows without a name are dropped
- steps: one instruction per line, numbered from 1
"""

from typing import Optional

from pydantic import BaseModel


class IngredientRow(BaseModel):
    name: str = ""
    quantity: str = ""
    unit: str = ""


class RecipeForm(BaseModel):
    """Raw values as typed into the recipe form."""
    title: str = ""
    description: str = ""
    cuisine: str = ""
    tags: str = ""
    prep_time: str = ""
    cook_time: str = ""
    servings: str = ""
    image_url: str = ""
    ingredients: list[IngredientRow] = []
    steps_text: str = ""
    is_public: bool = True


def parse_tags(raw: str) -> Optional[list[str]]:
    tags = [t.strip() for t in (raw or "").split(",")]
    tags = [t for t in tags if t]
    return tags or None


def parse_optional_int(raw: str, label: str) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{label} must be a whole number")


def parse_optional_float(raw: str, label: str) -> Optional[float]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{label} must be a number")


def parse_steps(text: str) -> list[dict]:
    lines = [line.strip() for line in (text or "").split("\n")]
    return [
        {"step_number": number, "instruction": line}
        for number, line in enumerate((l for l in lines if l), start=1)
    ]


def recipe_payload(form: RecipeForm) -> dict:
    """Body for POST /api/recipes. Raises ValueError on a malformed number."""
    return {
        "title": form.title.strip(),
        "description": form.description.strip(),
        "cuisine": form.cuisine.strip() or None,
        "tags": parse_tags(form.tags),
        "prep_time_minutes": parse_optional_int(form.prep_time, "Prep time"),
        "cook_time_minutes": parse_optional_int(form.cook_time, "Cook time"),
        "servings": parse_optional_int(form.servings, "Servings"),
        "is_public": form.is_public,
        "image_url": form.image_url.strip() or None,
    }


def ingredient_payload(rows: list[IngredientRow]) -> list[dict]:
    return [
        {
            "name": row.name.strip(),
            "quantity": parse_optional_float(row.quantity, f"Quantity for {row.name.strip()}"),
            "unit": row.unit.strip() or None,
        }
        for row in rows
        if row.name.strip()
    ]
