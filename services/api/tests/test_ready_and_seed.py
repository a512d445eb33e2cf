def test_ready_endpoint(client):
    resp = client.get("/api/ready")
    assert resp.status_code == 200
    data = resp.json()
    assert data == {"ok": True, "db_ok": True, "redis_ok": True}


def test_seed_creates_demo_profile_and_recipes(client):
    resp = client.post("/api/dev/seed")
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "demo@recipeshare.local"
    assert data["recipes_created"] == 3
    assert "Created" in data["message"]

    feed = client.post("/api/rpc/search_recipes", json={}).json()
    assert len(feed) == 3
    assert all(r["author_username"] == "demo" for r in feed)


def test_seed_is_idempotent(client):
    first = client.post("/api/dev/seed").json()
    second = client.post("/api/dev/seed").json()
    assert first["user"]["id"] == second["user"]["id"]
    assert second["recipes_created"] == 0
    assert len(client.post("/api/rpc/search_recipes", json={}).json()) == 3


def test_seeded_user_can_sign_in(client):
    client.post("/api/dev/seed")
    resp = client.post("/api/auth/signin", json={"email": "demo@recipeshare.local", "password": "demo-password"})
    assert resp.status_code == 200
