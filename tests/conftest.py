"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from taskboard.api.dependencies import get_mailer
from taskboard.database import Base, engine_options, get_db
from taskboard.main import app
from taskboard.models.user import User

from .fakes import RecordingMailer

DEFAULT_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use a sibling PostgreSQL test database
    url = make_url(os.getenv("DATABASE_URL"))
    SQLALCHEMY_DATABASE_URL = url.set(database=f"{url.database}_test").render_as_string(
        hide_password=False
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
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
def mailer():
    """Mailer that records messages instead of talking to SMTP."""
    return RecordingMailer()


@pytest.fixture(scope="function")
def client(db, mailer):
    """Create a test client with database and mailer overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str, name: str, role: str = "user") -> AuthHeaders:
    """Register a user through the API and return bearer headers for it."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": DEFAULT_PASSWORD, "name": name, "role": role},
    )
    assert response.status_code == 201, response.json()
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a regular user and return auth headers with user info."""
    return register(client, "test@example.com", "Test User")


@pytest.fixture
def other_headers(client):
    """A second regular user."""
    return register(client, "other@example.com", "Other User")


@pytest.fixture
def admin_headers(client):
    """An admin user."""
    return register(client, "admin@example.com", "Admin User", role="admin")


@pytest.fixture
def make_user(db):
    """Insert a user row directly, bypassing the API."""

    def _make_user(email: str, name: str | None = None, **fields) -> User:
        user = User(
            email=email,
            name=name or email.split("@")[0],
            password_hash="fake",  # noqa: S106
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user
