"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack.api.dependencies import Identity, get_auth_service, get_current_identity
from fintrack.errors import InvalidProviderToken
from fintrack.schemas.auth import (
    AuthResponse,
    GoogleLogin,
    TokenIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
    VerifyResponse,
)
from fintrack.services.auth import AuthResult, AuthService

router = APIRouter(prefix="/api", tags=["auth"])


def _auth_response(result: AuthResult, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/register", response_model=AuthResponse)
async def register(
    user_data: UserRegister,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    result = auth.register(user_data.name, user_data.email, user_data.password)
    return _auth_response(result, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    result = auth.login(credentials.email, credentials.password)
    return _auth_response(result, "Login successful")


@router.post("/auth/google", response_model=AuthResponse)
async def google_login(
    body: GoogleLogin,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with a Google ID token."""
    if not body.token:
        raise InvalidProviderToken("Token ID is required")
    result = auth.google_login(body.token)
    return _auth_response(result, "Google login successful")


@router.get("/auth/verify", response_model=VerifyResponse)
async def verify(
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    """Confirm the bearer token is still valid."""
    return VerifyResponse(user=TokenIdentity(id=identity.user_id, email=identity.email))
