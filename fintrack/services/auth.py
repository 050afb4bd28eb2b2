"""Authentication service for password and Google sign-in."""

import logging
from dataclasses import dataclass

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fintrack.errors import (
    DuplicateEmail,
    GoogleAccountConflict,
    InvalidCredentials,
    UnverifiedProviderEmail,
    UserNotFound,
)
from fintrack.models.user import User
from fintrack.services.google import GoogleIdentity, GoogleTokenVerifier
from fintrack.services.tokens import TokenService

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_google_id(db: Session, google_id: str) -> User | None:
    """Get a user by their Google subject."""
    return db.query(User).filter(User.google_id == google_id).first()


@dataclass
class AuthResult:
    """A freshly issued token and the user it belongs to."""

    token: str
    user: User


class AuthService:
    """Register and sign in users, always ending in a token."""

    def __init__(self, db: Session, tokens: TokenService, google: GoogleTokenVerifier):
        self.db = db
        self.tokens = tokens
        self.google = google

    def _issue(self, user: User) -> AuthResult:
        return AuthResult(token=self.tokens.issue(user.id, user.email), user=user)

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create a password account."""
        if get_user_by_email(self.db, email):
            raise DuplicateEmail()

        user = User(name=name.strip(), email=email, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise DuplicateEmail() from None
        self.db.refresh(user)

        logger.info(f"User registered: {user.email}")
        return self._issue(user)

    def login(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        user = get_user_by_email(self.db, email)
        if not user:
            logger.info(f"Login for unknown email: {email}")
            raise UserNotFound()

        if not user.has_password or not verify_password(password, user.password_hash):
            logger.warning(f"Failed password login for user {user.id}")
            raise InvalidCredentials()

        logger.info(f"User logged in: {user.email}")
        return self._issue(user)

    def google_login(self, credential: str) -> AuthResult:
        """Sign in with a Google ID token.

        The Google subject is the stable key: a known subject always signs in
        to the same account, even if its email has changed since. Only an
        unknown subject falls back to matching by email, which either links an
        existing account or creates a new one.
        """
        identity = self.google.verify(credential)

        user = get_user_by_google_id(self.db, identity.google_id)
        if user:
            logger.info(f"Existing user logged in via Google: {user.email}")
            return self._issue(user)

        user = get_user_by_email(self.db, identity.email)
        if user:
            self._link(user, identity)
            logger.info(f"Existing user logged in via Google: {user.email}")
            return self._issue(user)

        user = User(name=identity.name, email=identity.email, google_id=identity.google_id)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Created concurrently; sign in to whichever account won
            user = get_user_by_google_id(self.db, identity.google_id)
            if user is None:
                logger.warning(f"Google sign-up for {identity.email} collided with another account")
                raise GoogleAccountConflict() from None
            return self._issue(user)

        self.db.refresh(user)
        logger.info(f"New Google user created: {user.email}")
        return self._issue(user)

    def _link(self, user: User, identity: GoogleIdentity) -> None:
        """Attach a Google subject to an account found by email."""
        if user.google_id:
            logger.warning(f"User {user.id} is already linked to a different Google account")
            raise GoogleAccountConflict()
        if not identity.email_verified:
            logger.warning(f"Refusing to link Google account to user {user.id}: email not verified")
            raise UnverifiedProviderEmail()

        user.google_id = identity.google_id
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise GoogleAccountConflict() from None
        self.db.refresh(user)
        logger.info(f"Linked Google account to existing user {user.id}")
