"""FastAPI dependencies for authentication and services."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fintrack.config import Settings, get_settings
from fintrack.database import get_db
from fintrack.errors import InvalidToken, MissingToken
from fintrack.services.auth import AuthService
from fintrack.services.google import GoogleTokenVerifier
from fintrack.services.profile import ProfileService
from fintrack.services.tokens import TokenService

logger = logging.getLogger(__name__)

# auto_error is off so a missing header produces our own 401 envelope
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The caller as proven by their bearer token."""

    user_id: int
    email: str


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    """Get a token service built from configuration."""
    return TokenService.from_settings(settings)


@lru_cache
def _google_verifier(client_id: str | None) -> GoogleTokenVerifier:
    return GoogleTokenVerifier(client_id)


def get_google_verifier(
    settings: Annotated[Settings, Depends(get_settings)],
) -> GoogleTokenVerifier:
    """Get the Google ID token verifier for the configured client id.

    One verifier, and so one HTTP session for Google's certificates, is shared
    per client id.
    """
    return _google_verifier(settings.google_client_id)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    google: Annotated[GoogleTokenVerifier, Depends(get_google_verifier)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, tokens, google)


def get_profile_service(
    db: Annotated[Session, Depends(get_db)],
) -> ProfileService:
    """Get profile service with dependencies."""
    return ProfileService(db)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Resolve the caller from the bearer token.

    This only checks the token itself. A user deleted after the token was
    issued stays authenticated until the token expires.
    """
    if credentials is None or not credentials.credentials:
        raise MissingToken()

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        logger.warning(f"Rejected bearer token: {e.reason}")
        raise

    return Identity(user_id=claims.user_id, email=claims.email)
