"""Google ID token verification."""

import logging
from dataclasses import dataclass

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from fintrack.errors import InvalidProviderToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoogleIdentity:
    """Claims taken from a verified Google ID token."""

    google_id: str
    email: str
    name: str
    email_verified: bool


class GoogleTokenVerifier:
    """Verify Google ID tokens against Google's public keys and our client id."""

    def __init__(self, client_id: str | None):
        self.client_id = client_id
        self._request = google_requests.Request()

    def verify(self, token: str) -> GoogleIdentity:
        """Verify the token and extract the user's identity.

        Raises InvalidProviderToken with a message that tells an expired
        token apart from a client id mismatch.
        """
        if not self.client_id:
            logger.error("Google login attempted but GOOGLE_CLIENT_ID is not configured")
            raise InvalidProviderToken("Invalid Google client ID configuration.")

        try:
            idinfo = id_token.verify_oauth2_token(token, self._request, self.client_id)
        except (ValueError, GoogleAuthError) as e:
            reason = str(e)
            logger.warning(f"Google token rejected: {reason}")
            lowered = reason.lower()
            if "expired" in lowered or "too late" in lowered:
                raise InvalidProviderToken("Google token has expired. Please try again.") from e
            if "audience" in lowered:
                raise InvalidProviderToken("Invalid Google client ID configuration.") from e
            raise InvalidProviderToken(error=reason) from e

        email = idinfo.get("email")
        if not idinfo.get("sub") or not email:
            raise InvalidProviderToken(error="Token is missing the subject or email claim")

        return GoogleIdentity(
            google_id=idinfo["sub"],
            email=email,
            name=idinfo.get("name") or email.split("@")[0],
            email_verified=_as_bool(idinfo.get("email_verified", False)),
        )


def _as_bool(value) -> bool:
    # Google has sent email_verified both as a JSON bool and as a string
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)
