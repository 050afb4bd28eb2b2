"""Bearer token issuing and verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from fintrack.config import Settings
from fintrack.errors import InvalidToken


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: int
    email: str


class TokenService:
    """Issues and verifies signed, time-bound JWTs.

    Verification is stateless: a token is valid as long as its signature
    matches and it has not expired. There is no revocation list.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(hours=settings.jwt_expiration_hours),
        )

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Create a token for the user that expires after the configured window."""
        issued_at = now or datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token, raising InvalidToken with the reason it was rejected."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidToken("Token has expired") from None
        except JWTClaimsError as e:
            raise InvalidToken(f"Invalid token claims: {e}") from None
        except JWTError as e:
            reason = str(e)
            if "Signature verification failed" in reason:
                raise InvalidToken("Signature verification failed") from None
            raise InvalidToken("Malformed token") from None

        user_id = payload.get("sub")
        email = payload.get("email")
        if user_id is None or email is None:
            raise InvalidToken("Token is missing required claims")
        try:
            return TokenClaims(user_id=int(user_id), email=email)
        except (TypeError, ValueError):
            raise InvalidToken("Token is missing required claims") from None
