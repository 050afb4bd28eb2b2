"""SQLAlchemy models."""

from fintrack.models.profile import Profile
from fintrack.models.user import User

__all__ = [
    "User",
    "Profile",
]
