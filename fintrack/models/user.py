"""User model."""

from sqlalchemy import Column, Integer, String

from fintrack.database import Base
from fintrack.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for password and Google sign-in."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # null for Google-only accounts
    google_id = Column(String(255), unique=True, nullable=True, index=True)

    @property
    def has_password(self) -> bool:
        """Check if the account can sign in with a password."""
        return self.password_hash is not None
