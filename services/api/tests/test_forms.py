import pytest

from recipeshare.client.forms import (
    IngredientRow,
    RecipeForm,
    ingredient_payload,
    parse_steps,
    parse_tags,
    recipe_payload,
)


def test_parse_tags():
    assert parse_tags("vegan, quick ,, gluten-free") == ["vegan", "quick", "gluten-free"]
    assert parse_tags("  ,  ") is None
    assert parse_tags("") is None


def test_parse_steps_numbers_non_blank_lines():
    steps = parse_steps("Boil water\n\n  Add pasta  \nDrain\n")
    assert steps == [
        {"step_number": 1, "instruction": "Boil water"},
        {"step_number": 2, "instruction": "Add pasta"},
        {"step_number": 3, "instruction": "Drain"},
    ]
    assert parse_steps("   \n") == []


def test_recipe_payload_optional_numbers():
    payload = recipe_payload(RecipeForm(title=" Toast ", cuisine=" ", prep_time="5", servings=""))
    assert payload["title"] == "Toast"
    assert payload["cuisine"] is None
    assert payload["tags"] is None
    assert payload["prep_time_minutes"] == 5
    assert payload["cook_time_minutes"] is None
    assert payload["servings"] is None
    assert payload["image_url"] is None
    assert payload["is_public"] is True


def test_recipe_payload_bad_number():
    with pytest.raises(ValueError, match="Cook time"):
        recipe_payload(RecipeForm(title="x", cook_time="ten"))


def test_ingredient_payload_drops_blank_rows():
    rows = [
        IngredientRow(name="Flour", quantity="1.5", unit="cup"),
        IngredientRow(name="   ", quantity="2", unit="g"),
        IngredientRow(name=" Salt ", quantity="", unit=" "),
    ]
    assert ingredient_payload(rows) == [
        {"name": "Flour", "quantity": 1.5, "unit": "cup"},
        {"name": "Salt", "quantity": None, "unit": None},
    ]
