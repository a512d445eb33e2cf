"""End-to-end flows through RecipeShareClient against the in-process app."""

from datetime import date

from recipeshare.client import IngredientRow, RecipeForm, RecipeShareClient


def _signed_in(api, email="cook@example.com"):
    result = api.sign_up(email, "secret123")
    assert result.ok, result.status
    return api


def test_sign_up_and_sign_in_messages(api):
    result = api.sign_up("new@example.com", "secret123")
    assert result.ok
    assert result.status == "Account created. Check your email if confirmations are required."
    assert api.signed_in

    api.sign_out()
    assert not api.signed_in

    result = api.sign_in("new@example.com", "secret123")
    assert result.status == "Signed in"
    assert api.get_session().data["user"]["email"] == "new@example.com"


def test_backend_error_becomes_status(api):
    result = api.sign_in("nobody@example.com", "secret123")
    assert not result.ok
    assert result.status == "Invalid login credentials"


def test_ensure_profile(api):
    _signed_in(api)
    result = api.ensure_profile("Head Chef")
    assert result.ok
    assert api.user["username"] == "Head Chef"


def test_publish_recipe_full_form(api):
    _signed_in(api)
    form = RecipeForm(
        title="Pesto Pasta",
        tags="pasta, quick",
        prep_time="10",
        cook_time="12",
        servings="2",
        ingredients=[
            IngredientRow(name="Pasta", quantity="200", unit="g"),
            IngredientRow(name="", quantity="5", unit="g"),
            IngredientRow(name="Pesto", quantity="3", unit="tbsp"),
        ],
        steps_text="Boil pasta\n\nStir in pesto",
    )
    result = api.publish_recipe(form)
    assert result.ok
    assert result.status == "Recipe created"

    recipe = api.http.get(f"/api/recipes/{result.data['id']}").json()
    assert recipe["tags"] == ["pasta", "quick"]
    assert recipe["total_time"] == 22
    assert [i["name"] for i in recipe["ingredients"]] == ["Pasta", "Pesto"]
    assert [(s["step_number"], s["instruction"]) for s in recipe["steps"]] == [(1, "Boil pasta"), (2, "Stir in pesto")]


def test_publish_title_only_has_no_ingredients(api):
    _signed_in(api)
    result = api.publish_recipe(RecipeForm(title="Just Toast"))
    assert result.status == "Recipe created"
    recipe = api.http.get(f"/api/recipes/{result.data['id']}").json()
    assert recipe["ingredients"] == []
    assert recipe["steps"] == []


def test_publish_blank_title_sends_nothing(api):
    _signed_in(api)
    result = api.publish_recipe(RecipeForm(title="   ", steps_text="something"))
    assert not result.ok
    assert result.status == ""
    assert api.search_recipes().data == []


def test_publish_reports_ingredient_failure_without_rollback(api):
    _signed_in(api)
    form = RecipeForm(title="Odd", ingredients=[IngredientRow(name="Water", quantity="-1")])
    result = api.publish_recipe(form)
    assert not result.ok
    assert result.status.startswith("Recipe saved, but ingredients failed: ")
    assert [r["title"] for r in api.search_recipes().data] == ["Odd"]


def test_publish_still_saves_steps_after_ingredient_failure(api, client):
    _signed_in(api)
    form = RecipeForm(
        title="Odd",
        ingredients=[IngredientRow(name="Water", quantity="-1")],
        steps_text="Boil the water\nServe",
    )
    result = api.publish_recipe(form)
    assert not result.ok
    assert result.status.startswith("Recipe saved, but ingredients failed: ")

    recipe = client.get(f"/api/recipes/{result.data['id']}").json()
    assert recipe["ingredients"] == []
    assert [(s["step_number"], s["instruction"]) for s in recipe["steps"]] == [(1, "Boil the water"), (2, "Serve")]


def test_feed_guards_when_signed_out(api):
    assert api.toggle_like("r1").status == "Sign in to like recipes"
    assert api.toggle_save("r1").status == "Sign in to save recipes"
    assert api.post_comment("r1", "hi").status == "Sign in to comment"


def test_feed_like_save_comment(api):
    _signed_in(api)
    recipe = api.publish_recipe(RecipeForm(title="Shakshuka", cuisine="Middle Eastern")).data

    assert api.toggle_like(recipe["id"]).data["liked"] is True
    assert api.toggle_save(recipe["id"]).data["saved"] is True
    assert api.post_comment(recipe["id"], "  Great  ").ok
    assert not api.post_comment(recipe["id"], "   ").ok

    rows = api.search_recipes(cuisine="middle eastern", max_total_time="").data
    assert rows[0]["like_count"] == 1
    assert rows[0]["comment_count"] == 1
    assert rows[0]["is_liked"] and rows[0]["is_saved"]

    grouped = api.fetch_comments([recipe["id"]]).data
    assert [c["content"] for c in grouped[recipe["id"]]] == ["Great"]
    assert api.fetch_comments([]).data == {}


def test_search_rejects_bad_max_time(api):
    result = api.search_recipes(max_total_time="soon")
    assert not result.ok
    assert "Max time" in result.status


def test_sort_by_freshness_and_preview():
    rows = [
        {"recipe_id": "a", "created_at": "2026-01-01T10:00:00"},
        {"recipe_id": "b", "created_at": "2026-03-01T10:00:00"},
        {"recipe_id": "c", "created_at": "2026-02-01T10:00:00"},
    ]
    assert [r["recipe_id"] for r in RecipeShareClient.sort_by_freshness(rows)] == ["b", "c", "a"]
    assert RecipeShareClient.comment_preview([{"id": i} for i in range(5)]) == [{"id": 0}, {"id": 1}, {"id": 2}]


def test_planner_flow(api):
    _signed_in(api)
    recipe = api.publish_recipe(RecipeForm(title="Chili")).data

    assert api.create_plan("", date(2026, 3, 2), date(2026, 3, 8)).status == "Fill title and dates"
    plan_result = api.create_plan("Week", date(2026, 3, 2), "2026-03-08")
    assert plan_result.status == "Plan created"
    plan = plan_result.data

    assert api.add_meal(plan["id"], "", "2026-03-03").status == "Choose plan, recipe, and date"
    assert api.add_meal(plan["id"], recipe["id"], date(2026, 3, 4)).status == "Meal added"
    assert api.add_meal(plan["id"], recipe["id"], "2026-03-04", meal="lunch").ok
    outside = api.add_meal(plan["id"], recipe["id"], "2026-04-01")
    assert not outside.ok
    assert "outside the plan" in outside.status

    plans = api.load_plans().data
    items = api.load_items([p["id"] for p in plans]).data
    assert len(items[plan["id"]]) == 2
    by_date = RecipeShareClient.group_by_date(items[plan["id"]])
    assert list(by_date) == ["2026-03-04"]
    assert {i["meal"] for i in by_date["2026-03-04"]} == {"dinner", "lunch"}
    assert api.load_items([]).data == {}


def test_shopping_flow(api):
    _signed_in(api)
    recipe = api.publish_recipe(RecipeForm(
        title="Omelette",
        ingredients=[IngredientRow(name="Eggs", quantity="3"), IngredientRow(name="Butter", quantity="1", unit="tbsp")],
    )).data
    plan = api.create_plan("Brunch", "2026-03-07", "2026-03-08").data
    api.add_meal(plan["id"], recipe["id"], "2026-03-07", meal="breakfast")
    api.add_meal(plan["id"], recipe["id"], "2026-03-08", meal="breakfast")

    assert api.generate_from_plan("").status == "Pick a meal plan"
    result = api.generate_from_plan(plan["id"], idempotency_key="brunch-1")
    assert result.status == "Shopping list generated"

    lists = api.load_lists().data
    assert len(lists) == 1
    items = {i["ingredient"]: i for i in lists[0]["items"]}
    assert items["Eggs"]["quantity"] == 6.0
    assert items["Butter"]["quantity"] == 2.0 and items["Butter"]["unit"] == "tbsp"

    toggled = api.toggle_item(items["Eggs"])
    assert toggled.data["checked"] is True
    refreshed = {i["ingredient"]: i for i in api.load_lists().data[0]["items"]}
    assert refreshed["Eggs"]["checked"] is True
    assert refreshed["Butter"]["checked"] is False
