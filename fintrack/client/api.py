"""HTTP client for the onboarding API."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call, carrying the server's message when there is one."""

    def __init__(self, status_code: int | None, message: str, errors: list[str] | None = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    @property
    def is_auth_failure(self) -> bool:
        """True when the server rejected or did not receive the bearer token."""
        return self.status_code in (401, 403)


class OnboardingAPI:
    """Thin wrapper over the REST endpoints.

    Pass an existing ``httpx.Client`` (for example FastAPI's TestClient) to
    reuse its transport; otherwise one is created for ``base_url``. No
    retries are made: a failed call is surfaced to the caller.
    """

    def __init__(self, base_url: str = "", http: httpx.Client | None = None):
        self.http = http or httpx.Client(base_url=base_url, timeout=None)

    def close(self) -> None:
        self.http.close()

    def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Network error calling {method} {path}: {e}")
            raise ApiError(None, "Network error. Please check your connection and try again.") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error or not data.get("success", False):
            message = data.get("message") or f"Request failed. Status: {response.status_code}"
            logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message, data.get("errors"))
        return data

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST", "/api/register", json={"name": name, "email": email, "password": password}
        )

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._request("POST", "/api/login", json={"email": email, "password": password})

    def google_login(self, credential: str) -> dict[str, Any]:
        return self._request("POST", "/api/auth/google", json={"credential": credential})

    def verify(self, token: str) -> dict[str, Any]:
        return self._request("GET", "/api/auth/verify", token=token)

    def get_details(self, token: str) -> dict[str, Any]:
        return self._request("GET", "/api/user/details", token=token)

    def create_details(self, token: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/user/details", token=token, json=fields)

    def update_details(self, token: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", "/api/user/details", token=token, json=fields)
