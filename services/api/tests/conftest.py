import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import fakeredis
import fakeredis.aioredis

from recipeshare.main import app
from recipeshare.db import Base, get_db
from recipeshare.core.rate_limit import limiter
from recipeshare.infra import redis_client
from recipeshare.client import RecipeShareClient

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool  # one shared connection so every session sees the same in-memory DB
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def mock_redis():
    server = fakeredis.FakeServer()
    # Fake clients sharing the same server
    async_redis = fakeredis.aioredis.FakeRedis(server=server, decode_responses=True)
    sync_redis = fakeredis.FakeRedis(server=server, decode_responses=True)

    redis_client._redis_async = async_redis
    redis_client._redis_sync = sync_redis

    yield sync_redis

    redis_client._redis_async = None
    redis_client._redis_sync = None


@pytest.fixture(autouse=True)
def no_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def signup(client):
    """Create an account; returns (user, headers)."""
    def _signup(email="cook@example.com", password="secret123"):
        resp = client.post("/api/auth/signup", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return data["user"], {"Authorization": f"Bearer {data['access_token']}"}
    return _signup


@pytest.fixture
def auth_headers(signup):
    _, headers = signup()
    return headers


@pytest.fixture
def make_recipe(client):
    """Create a recipe (and optional ingredient lines) as the given caller."""
    def _make(headers, title="Tomato Soup", ingredients=None, **fields):
        resp = client.post("/api/recipes", json={"title": title, **fields}, headers=headers)
        assert resp.status_code == 201, resp.text
        recipe = resp.json()
        if ingredients:
            ing = client.post(f"/api/recipes/{recipe['id']}/ingredients", json=ingredients, headers=headers)
            assert ing.status_code == 201, ing.text
        return recipe
    return _make


@pytest.fixture
def api(client):
    """RecipeShareClient talking to the app in-process."""
    return RecipeShareClient(http=client)
