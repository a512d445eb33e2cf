"""Tests for shopping-list generation and item toggling."""

import pytest

from recipeshare.services.shopping import aggregate_ingredients


# --- aggregate_ingredients ---

def test_aggregate_merges_same_name_and_unit():
    rows = aggregate_ingredients([
        ("Flour", 200, "g"),
        ("flour ", 100, "grams"),
        ("FLOUR", 1, "cup"),
    ])
    assert rows == [
        {"ingredient": "FLOUR", "quantity": 1.0, "unit": "cup"},
        {"ingredient": "Flour", "quantity": 300.0, "unit": "g"},
    ]


def test_aggregate_unknown_quantities():
    rows = aggregate_ingredients([
        ("Salt", None, None),
        ("salt", None, ""),
        ("Pepper", None, "pinch"),
        ("Pepper", 2, "pinches"),
    ])
    assert rows == [
        {"ingredient": "Pepper", "quantity": 2.0, "unit": "pinch"},
        {"ingredient": "Salt", "quantity": None, "unit": None},
    ]


def test_aggregate_rounds_to_two_places():
    rows = aggregate_ingredients([("Milk", 0.1, "cup"), ("Milk", 0.2, "cup")])
    assert rows[0]["quantity"] == 0.3


def test_aggregate_keeps_first_spelling_and_orders_by_name():
    rows = aggregate_ingredients([
        ("Red  onion", 1, None),
        ("garlic", 2, "Cloves"),
        ("red onion", 1, None),
        ("Apple", 3, None),
    ])
    assert [r["ingredient"] for r in rows] == ["Apple", "garlic", "Red onion"]
    assert rows[1]["unit"] == "clove"
    assert rows[2]["quantity"] == 2.0


def test_aggregate_skips_blank_names():
    assert aggregate_ingredients([("  ", 1, "g")]) == []


# --- generate_shopping_list_from_meal_plan ---

@pytest.fixture
def planned_week(client, auth_headers, make_recipe):
    pasta = make_recipe(auth_headers, title="Pasta", ingredients=[
        {"name": "Spaghetti", "quantity": 200, "unit": "g"},
        {"name": "Garlic", "quantity": 2, "unit": "cloves"},
        {"name": "Parmesan"},
    ])
    soup = make_recipe(auth_headers, title="Soup", ingredients=[
        {"name": "garlic", "quantity": 1, "unit": "clove"},
        {"name": "Stock", "quantity": 1, "unit": "l"},
    ])
    plan = client.post("/api/meal-plans", json={
        "title": "Week 10", "start_date": "2026-03-02", "end_date": "2026-03-08",
    }, headers=auth_headers).json()
    for recipe, day in ((pasta, "2026-03-02"), (soup, "2026-03-03"), (pasta, "2026-03-05")):
        resp = client.post("/api/meal-plan-items", json={
            "meal_plan_id": plan["id"], "recipe_id": recipe["id"], "scheduled_for": day,
        }, headers=auth_headers)
        assert resp.status_code == 201
    return plan


def _generate(client, headers, plan_id, **kw):
    return client.post(
        "/api/rpc/generate_shopping_list_from_meal_plan",
        json={"p_meal_plan_id": plan_id}, headers=headers, **kw,
    )


def test_generate_from_plan(client, auth_headers, planned_week):
    resp = _generate(client, auth_headers, planned_week["id"])
    assert resp.status_code == 200, resp.text
    data = resp.json()

    assert data["title"] == "Shopping list: Week 10"
    assert data["status"] == "draft"
    assert data["generated_from_meal_plan"] == planned_week["id"]
    items = [(i["ingredient"], i["quantity"], i["unit"], i["checked"]) for i in data["items"]]
    assert items == [
        ("Garlic", 5.0, "clove", False),
        ("Parmesan", None, None, False),
        ("Spaghetti", 400.0, "g", False),
        ("Stock", 1.0, "l", False),
    ]


def test_generate_from_empty_plan(client, auth_headers):
    plan = client.post("/api/meal-plans", json={
        "title": "Empty", "start_date": "2026-03-02", "end_date": "2026-03-02",
    }, headers=auth_headers).json()
    resp = _generate(client, auth_headers, plan["id"])
    assert resp.status_code == 200
    assert resp.json()["items"] == []


def test_generate_unknown_or_foreign_plan(client, signup, planned_week):
    _, other = signup("other@example.com")
    resp = _generate(client, other, planned_week["id"])
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Meal plan not found"


def test_generate_requires_auth(client, planned_week):
    assert _generate(client, {}, planned_week["id"]).status_code == 401


def test_list_shopping_lists_newest_first(client, auth_headers, planned_week):
    first = _generate(client, auth_headers, planned_week["id"]).json()
    second = _generate(client, auth_headers, planned_week["id"]).json()

    lists = client.get("/api/shopping-lists", headers=auth_headers).json()
    assert [l["id"] for l in lists] == [second["id"], first["id"]]
    assert len(lists[0]["items"]) == 4


def test_lists_are_private(client, signup, auth_headers, planned_week):
    _generate(client, auth_headers, planned_week["id"])
    _, other = signup("other@example.com")
    assert client.get("/api/shopping-lists", headers=other).json() == []


def test_toggle_item_changes_only_that_item(client, auth_headers, planned_week):
    data = _generate(client, auth_headers, planned_week["id"]).json()
    target = data["items"][0]
    items_before = client.get(
        "/api/meal-plan-items", params={"meal_plan_id": planned_week["id"]}, headers=auth_headers
    ).json()
    recipe_ids = sorted({item["recipe_id"] for item in items_before})
    recipes_before = [client.get(f"/api/recipes/{rid}", headers=auth_headers).json() for rid in recipe_ids]
    assert all(r["ingredients"] for r in recipes_before)

    resp = client.patch(f"/api/shopping-list-items/{target['id']}", json={"checked": True}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["checked"] is True

    after = client.get("/api/shopping-lists", headers=auth_headers).json()[0]
    for before_item, after_item in zip(data["items"], after["items"]):
        if before_item["id"] == target["id"]:
            assert after_item["checked"] is True
        else:
            assert after_item == before_item

    items_after = client.get(
        "/api/meal-plan-items", params={"meal_plan_id": planned_week["id"]}, headers=auth_headers
    ).json()
    assert items_after == items_before

    recipes_after = [client.get(f"/api/recipes/{rid}", headers=auth_headers).json() for rid in recipe_ids]
    assert [r["ingredients"] for r in recipes_after] == [r["ingredients"] for r in recipes_before]

    resp = client.patch(f"/api/shopping-list-items/{target['id']}", json={"checked": False}, headers=auth_headers)
    assert resp.json()["checked"] is False


def test_toggle_someone_elses_item(client, signup, auth_headers, planned_week):
    data = _generate(client, auth_headers, planned_week["id"]).json()
    _, other = signup("other@example.com")
    resp = client.patch(
        f"/api/shopping-list-items/{data['items'][0]['id']}", json={"checked": True}, headers=other
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Shopping list item not found"


# --- Idempotency-Key on generation ---

def test_generate_with_idempotency_key_replays(client, auth_headers, planned_week):
    headers = {**auth_headers, "Idempotency-Key": "gen-1"}
    first = _generate(client, headers, planned_week["id"])
    second = _generate(client, headers, planned_week["id"])
    assert first.status_code == 200 and second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert len(client.get("/api/shopping-lists", headers=auth_headers).json()) == 1


def test_idempotency_key_reused_with_other_plan(client, auth_headers, planned_week):
    other_plan = client.post("/api/meal-plans", json={
        "title": "Other", "start_date": "2026-04-01", "end_date": "2026-04-01",
    }, headers=auth_headers).json()
    headers = {**auth_headers, "Idempotency-Key": "gen-2"}
    _generate(client, headers, planned_week["id"])
    resp = _generate(client, headers, other_plan["id"])
    assert resp.status_code == 409


def test_failed_generation_releases_idempotency_key(client, auth_headers, mock_redis):
    headers = {**auth_headers, "Idempotency-Key": "gen-3"}
    resp = _generate(client, headers, "missing-plan")
    assert resp.status_code == 404
    assert list(mock_redis.scan_iter("recipeshare:idemp:*")) == []
