"""Pytest configuration and fixtures."""

import os
import tempfile

# Keep uploads out of the working tree; must be set before the app reads settings.
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="notebook_test_"))
os.environ.setdefault("PUBLIC_BASE_URL", "http://testserver")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

import notebook.services.realtime as realtime_module  # noqa: E402
from notebook import models  # noqa: E402, F401
from notebook.database import Base, get_db  # noqa: E402
from notebook.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite otherwise
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """Factory for independent sessions on the test database."""
    return TestingSessionLocal


@pytest.fixture(autouse=True)
def mock_publisher():
    """Replace the Redis publisher so tests never need a running Redis."""
    publisher = MagicMock()
    realtime_module._publisher = publisher
    yield publisher
    realtime_module._publisher = None


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register users and return their auth headers."""

    def _make_user(email: str, name: str | None = None, password: str = "testpass123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=email,
        )

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    """Create a user and return auth headers with user info."""
    return make_user("test@example.com", "Test User")


@pytest.fixture
def create_list(client):
    """Create a list through the API and return its JSON body."""

    def _create_list(headers, name: str = "Favourites", **fields):
        response = client.post("/api/v1/lists", headers=headers, json={"name": name, **fields})
        assert response.status_code == 200, response.text
        return response.json()

    return _create_list


@pytest.fixture
def add_restaurant(client):
    """Add a restaurant to a list through the API and return the list entry."""

    def _add_restaurant(headers, list_id: str, place_id: str, name: str | None = None, **fields):
        response = client.post(
            "/api/v1/restaurants",
            headers=headers,
            json={
                "list_id": list_id,
                "place_id": place_id,
                "name": name or f"Restaurant {place_id}",
                "address": "1-1 Chiyoda, Tokyo",
                **fields,
            },
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _add_restaurant
