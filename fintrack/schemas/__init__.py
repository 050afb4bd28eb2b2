"""Pydantic schemas for API requests and responses."""

from fintrack.schemas.auth import (
    AuthResponse,
    GoogleLogin,
    UserLogin,
    UserRegister,
    UserResponse,
    VerifyResponse,
)
from fintrack.schemas.profile import (
    DetailsLookupResponse,
    DetailsSavedResponse,
    ProfileFields,
    ProfileResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "GoogleLogin",
    "UserResponse",
    "AuthResponse",
    "VerifyResponse",
    "ProfileFields",
    "ProfileResponse",
    "DetailsLookupResponse",
    "DetailsSavedResponse",
]
