"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so point them at the test database first
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    os.environ["DATABASE_URL"] = os.environ["DATABASE_URL"].replace("/fintrack", "/fintrack_test")
else:
    # Running locally - use SQLite
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client.apps.googleusercontent.com")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from fintrack import models  # noqa: E402, F401
from fintrack.api.dependencies import get_google_verifier  # noqa: E402
from fintrack.config import get_settings  # noqa: E402
from fintrack.database import Base, engine, get_db  # noqa: E402
from fintrack.errors import InvalidProviderToken  # noqa: E402
from fintrack.main import app  # noqa: E402
from fintrack.services.google import GoogleIdentity  # noqa: E402
from fintrack.services.tokens import TokenService  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeGoogleVerifier:
    """Stands in for Google: known tokens map to identities, others are rejected."""

    def __init__(self):
        self.identities: dict[str, GoogleIdentity] = {}

    def add(
        self,
        token: str,
        google_id: str,
        email: str,
        name: str = "Google User",
        email_verified: bool = True,
    ) -> None:
        self.identities[token] = GoogleIdentity(
            google_id=google_id, email=email, name=name, email_verified=email_verified
        )

    def verify(self, token: str) -> GoogleIdentity:
        if token not in self.identities:
            raise InvalidProviderToken(error="Wrong number of segments in token")
        return self.identities[token]


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
def google(client):
    """Replace Google token verification with a fake."""
    verifier = FakeGoogleVerifier()
    app.dependency_overrides[get_google_verifier] = lambda: verifier
    return verifier


@pytest.fixture
def token_service():
    """Token service with the same configuration as the app."""
    return TokenService.from_settings(get_settings())


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = client.post(
        "/api/register",
        json={"name": "Test User", "email": "test@example.com", "password": "testpass123"},
    )
    assert response.status_code == 200
    data = response.json()
    token = data["token"]
    user_id = data["user"]["id"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"}, user_id=user_id, email="test@example.com"
    )


def make_profile(**overrides) -> dict:
    """A complete, valid profile submission."""
    profile = {
        "fullName": "Alice Sharma",
        "email": "alice@example.com",
        "phone": "9876543210",
        "dob": "1990-05-17",
        "gender": "Female",
        "maritalStatus": "Single",
        "occupation": "Employed (Private)",
        "company": "Acme Corp",
        "annualIncome": "₹5,00,001 - ₹10,00,000",
        "investmentExperience": "Intermediate (2-5 years)",
        "riskTolerance": "Moderate",
        "goals": ["Wealth Creation"],
        "preferredCommunication": ["Email"],
        "acceptTerms": True,
    }
    profile.update(overrides)
    return profile


@pytest.fixture
def profile_payload():
    """Factory for profile submissions."""
    return make_profile
