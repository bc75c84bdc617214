"""Pytest configuration and fixtures."""

import os
import uuid

# Cheap hashes for tests; must be set before the password context is built
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from account_service.database import Base, get_db
from account_service.main import app
from account_service.models.enums import Role
from account_service.services.passwords import hash_password
from account_service.services.tokens import TokenService, get_token_service
from account_service.services.user_repository import UserRepository

ADMIN_PASSWORD = "adminpass123"
USER_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/accounts", "/accounts_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def repository(db):
    """User store bound to the test session."""
    return UserRepository(db)


@pytest.fixture
def token_service():
    """Token service with a secret unique to this test."""
    return TokenService(secret=f"test-secret-{uuid.uuid4().hex}")


@pytest.fixture(scope="function")
def client(db, token_service):
    """Create a test client with database and token service overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin(repository):
    """An active admin account stored directly in the database."""
    return repository.create(
        name="Admin User",
        email="admin@example.com",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=Role.ADMIN.value,
    )


@pytest.fixture
def admin_headers(admin, token_service):
    """Auth headers for the admin account."""
    token = token_service.issue(admin.id, admin.role)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=admin.id, email=admin.email)


@pytest.fixture
def auth_headers(client):
    """Register a regular user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "test@example.com", "password": USER_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )
