"""API endpoint tests."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from fintrack.api.dependencies import get_profile_service
from fintrack.main import app, lifespan


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["status"] == "OK"
    assert data["storageConnected"] is True
    assert "timestamp" in data


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/register",
        json={"name": "New User", "email": "newuser@example.com", "password": "password123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["name"] == "New User"
    assert isinstance(data["user"]["id"], int)


def test_register_duplicate_email(client, auth_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/register",
        json={"name": "Duplicate", "email": auth_headers.email, "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists"}


def test_register_missing_fields(client):
    """Test registration reports every missing field."""
    response = client.post("/api/register", json={"email": "partial@example.com"})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert set(data["errors"]) == {"name", "password"}


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["id"] == auth_headers.user_id


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post("/api/login", json={"email": auth_headers.email, "password": "wrongpass"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


def test_login_unknown_email(client):
    """Test login for an email nobody registered."""
    response = client.post(
        "/api/login", json={"email": "nobody@example.com", "password": "password123"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "User not found"


def test_missing_token(client):
    """Test that protected endpoints require a bearer token."""
    response = client.get("/api/user/details")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Access token required"}
    assert response.headers["www-authenticate"] == "Bearer"


def test_non_bearer_authorization_is_missing_token(client):
    """Test that a non-bearer scheme counts as no token."""
    response = client.get("/api/user/details", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


def test_invalid_token(client):
    """Test that a garbage token is rejected with 403."""
    response = client.get("/api/user/details", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Invalid or expired token"
    assert data["error"] == "Malformed token"


def test_expired_token(client, auth_headers, token_service):
    """Test that an expired token is rejected with its reason."""
    token = token_service.issue(
        auth_headers.user_id,
        auth_headers.email,
        now=datetime.now(UTC) - timedelta(hours=25),
    )
    response = client.get("/api/user/details", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["error"] == "Token has expired"


def test_verify_token(client, auth_headers):
    """Test the lightweight token verification endpoint."""
    response = client.get("/api/auth/verify", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "user": {"id": auth_headers.user_id, "email": auth_headers.email},
    }


def test_onboarding_flow(client, profile_payload):
    """Register, find no profile, submit one, then read it back."""
    response = client.post(
        "/api/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "pw123456"},
    )
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    response = client.get("/api/user/details", headers=headers)
    assert response.status_code == 200
    assert response.json()["exists"] is False

    submission = profile_payload()
    response = client.post("/api/user/details", headers=headers, json=submission)
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = client.get("/api/user/details", headers=headers)
    data = response.json()
    assert data["exists"] is True
    details = data["details"]
    for key, value in submission.items():
        assert details[key] == value, key
    assert details["submittedAt"]
    assert details["updatedAt"]


def test_create_details_twice(client, auth_headers, profile_payload):
    """Test that a profile can only be created once."""
    first = client.post("/api/user/details", headers=auth_headers, json=profile_payload())
    assert first.status_code == 200

    second = client.post("/api/user/details", headers=auth_headers, json=profile_payload())
    assert second.status_code == 400
    assert second.json()["message"] == "Details already exist. Use PUT to update."


def test_create_details_email_comes_from_account(client, auth_headers, profile_payload):
    """Test that the stored email is the account's, not the submitted one."""
    response = client.post(
        "/api/user/details",
        headers=auth_headers,
        json=profile_payload(email="someone-else@example.com"),
    )
    assert response.status_code == 200
    assert response.json()["details"]["email"] == auth_headers.email


def test_create_details_missing_fields(client, auth_headers, profile_payload):
    """Test that every missing field is reported together."""
    response = client.post(
        "/api/user/details",
        headers=auth_headers,
        json=profile_payload(fullName="  ", goals=[], preferredCommunication=[], acceptTerms=False),
    )
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["errors"] == ["fullName", "goals", "preferredCommunication", "acceptTerms"]

    # Nothing was stored
    response = client.get("/api/user/details", headers=auth_headers)
    assert response.json()["exists"] is False


def test_create_details_company_optional(client, auth_headers, profile_payload):
    """Test that company may be left blank."""
    response = client.post(
        "/api/user/details", headers=auth_headers, json=profile_payload(company="")
    )
    assert response.status_code == 200
    assert response.json()["details"]["company"] is None


def test_create_details_invalid_choice(client, auth_headers, profile_payload):
    """Test that enumerated fields reject unknown values."""
    response = client.post(
        "/api/user/details",
        headers=auth_headers,
        json=profile_payload(gender="Robot", goals=["Buy a Boat"]),
    )
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"gender", "goals"}


def test_create_details_for_deleted_user(client, token_service, profile_payload):
    """Test that a valid token for a user that no longer exists gets 404."""
    token = token_service.issue(999999, "ghost@example.com")
    response = client.post(
        "/api/user/details",
        headers={"Authorization": f"Bearer {token}"},
        json=profile_payload(),
    )
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_update_details_without_profile(client, auth_headers, profile_payload):
    """Test that updating requires an existing profile."""
    response = client.put("/api/user/details", headers=auth_headers, json=profile_payload())
    assert response.status_code == 404
    assert response.json()["message"] == "User details not found"


def test_update_details_replaces_fields(client, auth_headers, profile_payload):
    """Test that update replaces every field and advances updatedAt."""
    created = client.post("/api/user/details", headers=auth_headers, json=profile_payload())
    before = created.json()["details"]

    changed = profile_payload(
        fullName="Alice S. Rao",
        maritalStatus="Married",
        company="",
        goals=["Retirement Planning", "Tax Saving"],
        preferredCommunication=["SMS", "WhatsApp"],
    )
    response = client.put("/api/user/details", headers=auth_headers, json=changed)
    assert response.status_code == 200
    after = response.json()["details"]

    assert after["fullName"] == "Alice S. Rao"
    assert after["maritalStatus"] == "Married"
    assert after["company"] is None
    assert after["goals"] == ["Retirement Planning", "Tax Saving"]
    assert after["preferredCommunication"] == ["SMS", "WhatsApp"]
    assert after["submittedAt"] == before["submittedAt"]
    assert datetime.fromisoformat(after["updatedAt"]) > datetime.fromisoformat(
        before["updatedAt"]
    )


def test_update_details_rejects_incomplete_profile(client, auth_headers, profile_payload):
    """Test that update applies the same completeness rules as create."""
    client.post("/api/user/details", headers=auth_headers, json=profile_payload())

    response = client.put(
        "/api/user/details", headers=auth_headers, json=profile_payload(riskTolerance="")
    )
    assert response.status_code == 400
    assert response.json()["errors"] == ["riskTolerance"]

    stored = client.get("/api/user/details", headers=auth_headers).json()["details"]
    assert stored["riskTolerance"] == "Moderate"


def test_profiles_are_per_user(client, auth_headers, profile_payload):
    """Test that one user's profile is invisible to another."""
    client.post("/api/user/details", headers=auth_headers, json=profile_payload())

    other = client.post(
        "/api/register",
        json={"name": "Bob", "email": "bob@example.com", "password": "password123"},
    ).json()
    response = client.get(
        "/api/user/details", headers={"Authorization": f"Bearer {other['token']}"}
    )
    assert response.json()["exists"] is False


def test_unknown_route(client):
    """Test that unmatched routes return a structured 404."""
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "API endpoint not found",
        "path": "/api/nope",
        "method": "GET",
    }


def test_unhandled_error_returns_structured_500(client, auth_headers):
    """Test that unexpected errors become a generic 500 envelope."""

    class BrokenProfiles:
        def get(self, user_id):
            raise RuntimeError("disk on fire")

    app.dependency_overrides[get_profile_service] = lambda: BrokenProfiles()
    with TestClient(app, raise_server_exceptions=False) as raw_client:
        response = raw_client.get("/api/user/details", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


async def start_app():
    async with lifespan(app):
        pass


def test_startup_checks_database():
    with patch("fintrack.main.check_connection") as mock_check:
        asyncio.run(start_app())
    mock_check.assert_called_once_with()


def test_startup_fails_without_database():
    """The app refuses to start when the database is unreachable."""
    down = OperationalError("SELECT 1", {}, Exception("connection refused"))
    with patch("fintrack.main.check_connection", side_effect=down):
        with pytest.raises(SystemExit) as exc_info:
            asyncio.run(start_app())
    assert exc_info.value.code == 1
