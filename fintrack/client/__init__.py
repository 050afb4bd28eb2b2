"""Python client for the onboarding API: session and profile form controllers."""

from fintrack.client.api import ApiError, OnboardingAPI
from fintrack.client.form import FormMode, ProfileFormController
from fintrack.client.session import SessionController, SessionState
from fintrack.client.storage import (
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
    StoredCredentials,
)

__all__ = [
    "ApiError",
    "OnboardingAPI",
    "SessionController",
    "SessionState",
    "ProfileFormController",
    "FormMode",
    "CredentialStore",
    "MemoryCredentialStore",
    "FileCredentialStore",
    "StoredCredentials",
]
