"""HTTP client reproducing the app's user flows.

Each method does what one button in the UI does: check the form, call the
API, and report a one-line status. Lists are always re-fetched after a
mutation; nothing is cached.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel

from ..settings import settings
from .forms import RecipeForm, ingredient_payload, parse_optional_int, parse_steps, recipe_payload

logger = logging.getLogger("recipeshare.client")

DateLike = Union[date, str, None]


class ActionResult(BaseModel):
    ok: bool
    status: str = ""
    data: Any = None


def _iso(value: DateLike) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value or None


def _error_message(resp: httpx.Response) -> str:
    try:
        detail = resp.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    return resp.text or f"Request failed ({resp.status_code})"


class RecipeShareClient:
    """Client for the RecipeShare API.

    Pass ``http`` to reuse an existing ``httpx.Client`` (its base URL must
    point at the service root); otherwise one is built from ``base_url``.
    """

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.access_token: Optional[str] = None
        self.user: Optional[dict] = None

    @property
    def signed_in(self) -> bool:
        return self.access_token is not None

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = dict(extra or {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _call(self, method: str, path: str, *, json: Any = None, params: Any = None, headers: Optional[dict] = None):
        """Send one request. Returns (ok, data) or (False, message)."""
        try:
            resp = self.http.request(method, path, json=json, params=params, headers=self._headers(headers))
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            return False, str(e)
        if resp.status_code >= 400:
            return False, _error_message(resp)
        if resp.status_code == 204 or not resp.content:
            return True, None
        return True, resp.json()

    # --- Auth ---

    def _open_session(self, path: str, email: str, password: str, success: str) -> ActionResult:
        ok, data = self._call("POST", path, json={"email": email, "password": password})
        if not ok:
            return ActionResult(ok=False, status=data)
        self.access_token = data["access_token"]
        self.user = data["user"]
        return ActionResult(ok=True, status=success, data=data["user"])

    def sign_in(self, email: str, password: str) -> ActionResult:
        return self._open_session("/api/auth/signin", email, password, "Signed in")

    def sign_up(self, email: str, password: str) -> ActionResult:
        return self._open_session(
            "/api/auth/signup", email, password,
            "Account created. Check your email if confirmations are required.",
        )

    def sign_out(self) -> ActionResult:
        ok, data = self._call("POST", "/api/auth/signout")
        self.access_token = None
        self.user = None
        return ActionResult(ok=ok, status="Signed out" if ok else data)

    def get_session(self) -> ActionResult:
        if not self.signed_in:
            return ActionResult(ok=True, data=None)
        ok, data = self._call("GET", "/api/auth/session")
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, data=data)

    def ensure_profile(self, username: Optional[str] = None) -> ActionResult:
        ok, data = self._call("PUT", "/api/profiles", json={"username": username})
        if not ok:
            return ActionResult(ok=False, status=data)
        self.user = data
        return ActionResult(ok=True, data=data)

    # --- Recipe form ---

    def publish_recipe(self, form: RecipeForm) -> ActionResult:
        """Insert the recipe, then its ingredients, then its steps.

        A failure after the recipe row exists is reported but the recipe is
        kept. Steps are still sent when the ingredients fail; the first
        failure is the one reported.
        """
        if not form.title.strip():
            return ActionResult(ok=False)

        try:
            payload = recipe_payload(form)
            ingredients = ingredient_payload(form.ingredients)
        except ValueError as e:
            return ActionResult(ok=False, status=str(e))

        ok, data = self._call("POST", "/api/recipes", json=payload)
        if not ok:
            return ActionResult(ok=False, status=data or "Could not create recipe")
        recipe = data

        failure = None
        if ingredients:
            ok, err = self._call("POST", f"/api/recipes/{recipe['id']}/ingredients", json=ingredients)
            if not ok:
                failure = f"Recipe saved, but ingredients failed: {err}"

        steps = parse_steps(form.steps_text)
        if steps:
            ok, err = self._call("POST", f"/api/recipes/{recipe['id']}/steps", json=steps)
            if not ok and failure is None:
                failure = f"Recipe saved, but steps failed: {err}"

        if failure:
            logger.warning(f"Recipe {recipe['id']}: {failure}")
            return ActionResult(ok=False, status=failure, data=recipe)
        return ActionResult(ok=True, status="Recipe created", data=recipe)

    # --- Feed ---

    def search_recipes(self, search: str = "", cuisine: str = "", max_total_time: Union[int, str, None] = None) -> ActionResult:
        if isinstance(max_total_time, str):
            try:
                max_total_time = parse_optional_int(max_total_time, "Max time")
            except ValueError as e:
                return ActionResult(ok=False, status=str(e))
        ok, data = self._call("POST", "/api/rpc/search_recipes", json={
            "search": search,
            "cuisine_filters": [cuisine] if cuisine else None,
            "max_total_time": max_total_time,
        })
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, data=data)

    def toggle_like(self, recipe_id: str) -> ActionResult:
        if not self.signed_in:
            return ActionResult(ok=False, status="Sign in to like recipes")
        ok, data = self._call("POST", "/api/rpc/toggle_like", json={"p_recipe_id": recipe_id})
        return ActionResult(ok=ok, status="" if ok else data, data=data if ok else None)

    def toggle_save(self, recipe_id: str) -> ActionResult:
        if not self.signed_in:
            return ActionResult(ok=False, status="Sign in to save recipes")
        ok, data = self._call("POST", "/api/rpc/toggle_save", json={"p_recipe_id": recipe_id})
        return ActionResult(ok=ok, status="" if ok else data, data=data if ok else None)

    def post_comment(self, recipe_id: str, content: str) -> ActionResult:
        if not self.signed_in:
            return ActionResult(ok=False, status="Sign in to comment")
        content = (content or "").strip()
        if not content:
            return ActionResult(ok=False)
        ok, data = self._call("POST", "/api/comments", json={"recipe_id": recipe_id, "content": content})
        return ActionResult(ok=ok, status="" if ok else data, data=data if ok else None)

    def fetch_comments(self, recipe_ids: list[str]) -> ActionResult:
        """Comments for ``recipe_ids`` grouped by recipe id, newest first."""
        if not recipe_ids:
            return ActionResult(ok=True, data={})
        ok, data = self._call("GET", "/api/comments", params={"recipe_id": recipe_ids})
        if not ok:
            return ActionResult(ok=False, status=data)
        grouped: dict[str, list[dict]] = defaultdict(list)
        for comment in data:
            grouped[comment["recipe_id"]].append(comment)
        return ActionResult(ok=True, data=dict(grouped))

    @staticmethod
    def comment_preview(comments: list[dict], count: Optional[int] = None) -> list[dict]:
        return comments[: count if count is not None else settings.comment_preview_count]

    @staticmethod
    def sort_by_freshness(rows: list[dict]) -> list[dict]:
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    # --- Meal planner ---

    def create_plan(self, title: str, start_date: DateLike, end_date: DateLike) -> ActionResult:
        if not (title or "").strip() or not start_date or not end_date:
            return ActionResult(ok=False, status="Fill title and dates")
        ok, data = self._call("POST", "/api/meal-plans", json={
            "title": title,
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
        })
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, status="Plan created", data=data)

    def load_plans(self) -> ActionResult:
        ok, data = self._call("GET", "/api/meal-plans")
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, data=data)

    def add_meal(self, meal_plan_id: str, recipe_id: str, scheduled_for: DateLike, meal: str = "dinner") -> ActionResult:
        if not meal_plan_id or not recipe_id or not scheduled_for:
            return ActionResult(ok=False, status="Choose plan, recipe, and date")
        ok, data = self._call("POST", "/api/meal-plan-items", json={
            "meal_plan_id": meal_plan_id,
            "recipe_id": recipe_id,
            "scheduled_for": _iso(scheduled_for),
            "meal": meal,
        })
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, status="Meal added", data=data)

    def load_items(self, plan_ids: list[str]) -> ActionResult:
        """Plan items grouped by plan id, earliest date first."""
        if not plan_ids:
            return ActionResult(ok=True, data={})
        ok, data = self._call("GET", "/api/meal-plan-items", params={"meal_plan_id": plan_ids})
        if not ok:
            return ActionResult(ok=False, status=data)
        grouped: dict[str, list[dict]] = defaultdict(list)
        for item in data:
            grouped[item["meal_plan_id"]].append(item)
        return ActionResult(ok=True, data=dict(grouped))

    @staticmethod
    def group_by_date(items: list[dict]) -> dict[str, list[dict]]:
        grouped: dict[str, list[dict]] = {}
        for item in items:
            grouped.setdefault(item["scheduled_for"], []).append(item)
        return grouped

    # --- Shopping ---

    def generate_from_plan(self, meal_plan_id: str, idempotency_key: Optional[str] = None) -> ActionResult:
        if not meal_plan_id:
            return ActionResult(ok=False, status="Pick a meal plan")
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        ok, data = self._call(
            "POST", "/api/rpc/generate_shopping_list_from_meal_plan",
            json={"p_meal_plan_id": meal_plan_id}, headers=headers,
        )
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, status="Shopping list generated", data=data)

    def load_lists(self) -> ActionResult:
        ok, data = self._call("GET", "/api/shopping-lists")
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, data=data)

    def toggle_item(self, item: dict) -> ActionResult:
        ok, data = self._call(
            "PATCH", f"/api/shopping-list-items/{item['id']}",
            json={"checked": not item["checked"]},
        )
        if not ok:
            return ActionResult(ok=False, status=data)
        return ActionResult(ok=True, data=data)
