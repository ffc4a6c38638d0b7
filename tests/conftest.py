"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta

# Use test database - PostgreSQL in Docker, SQLite locally.
# Must be configured before the application modules read their settings.
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    os.environ["DATABASE_URL"] = os.environ["DATABASE_URL"].replace("/expenses", "/expenses_test")
else:
    # Running locally - use SQLite
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.pop("ADMIN_USER", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.database import Base, SessionLocal, engine, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.user import User  # noqa: E402
from src.services.auth import get_password_hash  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

TEST_USERNAME = "testuser"
TEST_PASSWORD = "testpass123"


class FrozenClock:
    """Callable clock returning a fixed time until advanced."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = SessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


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
def clock():
    """Frozen clock set to mid-March 2024, adjustable per test."""
    return FrozenClock(datetime(2024, 3, 15, 12, 0, 0))


@pytest.fixture
def user(db):
    """Create the default test user."""
    test_user = User(username=TEST_USERNAME, password_hash=get_password_hash(TEST_PASSWORD))
    db.add(test_user)
    db.commit()
    db.refresh(test_user)
    return test_user


@pytest.fixture
def other_user(db):
    """Create a second user for ownership checks."""
    second = User(username="otheruser", password_hash=get_password_hash("otherpass123"))
    db.add(second)
    db.commit()
    db.refresh(second)
    return second


@pytest.fixture
def auth_client(client, user):
    """Test client holding a valid session cookie for the test user."""
    response = client.post(
        "/api/v1/auth/login",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    assert client.cookies.get("session")
    return client
