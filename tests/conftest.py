"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone

# Settings are read once at import time, so configure before importing the app.
TEST_JWT_SECRET = "test-identity-secret"
TEST_JWT_ISSUER = "https://identity.test"
TEST_JWT_AUDIENCE = "shelf"
TEST_ADMIN_EMAIL = "admin@example.com"

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["IDENTITY_JWT_KEY"] = TEST_JWT_SECRET
os.environ["IDENTITY_JWT_ALGORITHM"] = "HS256"
os.environ["IDENTITY_JWT_ISSUER"] = TEST_JWT_ISSUER
os.environ["IDENTITY_JWT_AUDIENCE"] = TEST_JWT_AUDIENCE
os.environ["ADMIN_EMAILS"] = f" {TEST_ADMIN_EMAIL.upper()} , curator@example.com"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.api.v1.dependencies import get_change_feed
from app.schemas.identity import VerifiedIdentity
from app.services.change_feed import ChangeFeed


# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_token(subject: str, expires_in: int = 3600, **claims) -> str:
    """Mint an identity token the way the identity provider would."""
    payload = {
        "sub": subject,
        "iss": TEST_JWT_ISSUER,
        "aud": TEST_JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    payload.update(claims)
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def bearer(subject: str) -> dict:
    return {"Authorization": f"Bearer {make_token(subject)}"}


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def change_feed():
    """A private change feed per test."""
    return ChangeFeed()


@pytest.fixture(scope="function")
def client(db_session, change_feed):
    """Create a test client with overridden dependencies."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_change_feed] = lambda: change_feed

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sync_user(client):
    """Return a helper that signs a subject in and syncs its profile."""

    def _sync(subject: str, email: str, name: str = "Test User", avatar_url=None) -> dict:
        headers = bearer(subject)
        response = client.post(
            "/api/v1/users/sync",
            headers=headers,
            json={"name": name, "email": email, "avatar_url": avatar_url},
        )
        assert response.status_code == 200, response.text
        return {"id": response.json()["id"], "headers": headers}

    return _sync


@pytest.fixture
def user(sync_user):
    """A synced regular user."""
    return sync_user("user_alice", "alice@example.com", name="Alice")


@pytest.fixture
def other_user(sync_user):
    """A second synced regular user."""
    return sync_user("user_bob", "bob@example.com", name="Bob")


@pytest.fixture
def admin(sync_user):
    """A synced admin (email on the allow-list)."""
    return sync_user("user_admin", TEST_ADMIN_EMAIL, name="Admin")


@pytest.fixture
def auth_headers(user):
    """Return authorization headers for authenticated requests."""
    return user["headers"]


@pytest.fixture
def admin_headers(admin):
    return admin["headers"]


@pytest.fixture
def identity():
    """Verified identity for service-level tests."""
    return VerifiedIdentity(subject="user_alice")


@pytest.fixture
def app_settings():
    return settings


@pytest.fixture
def recommendation_data():
    """Valid input for adding a recommendation."""
    return {
        "title": "Dune: Part Two",
        "genre": "sci-fi",
        "link": "https://letterboxd.com/film/dune-part-two/",
        "blurb": "Sand, worms and a very loud score.",
    }
