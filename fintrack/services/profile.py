"""Profile store: one onboarding record per user."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fintrack.errors import ProfileAlreadyExists, ProfileNotFound, ProfileValidationError
from fintrack.models.profile import Profile
from fintrack.schemas.profile import ProfileFields

logger = logging.getLogger(__name__)


def validate_profile(fields: ProfileFields) -> None:
    """Raise ProfileValidationError listing every field that blocks saving."""
    missing = fields.missing_fields()
    if missing:
        raise ProfileValidationError(missing)


class ProfileService:
    """Create, read and replace investor profiles.

    A missing profile is not an error for reads: it is how callers learn
    that onboarding has not been completed yet.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Profile | None:
        """Get the user's profile, or None if onboarding is incomplete."""
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def create(self, user_id: int, email: str, fields: ProfileFields) -> Profile:
        """Create the user's profile.

        Duplicate creation is caught by the unique constraint on user_id, so
        two concurrent first submissions cannot both succeed.
        """
        validate_profile(fields)

        now = datetime.now(UTC)
        profile = Profile(
            user_id=user_id,
            email=email,
            submitted_at=now,
            updated_at=now,
            **fields.to_columns(),
        )
        self.db.add(profile)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Profile already exists for user {user_id}")
            raise ProfileAlreadyExists() from None
        self.db.refresh(profile)

        logger.info(f"Profile created for user {user_id}")
        return profile

    def update(self, user_id: int, fields: ProfileFields) -> Profile:
        """Replace every mutable field of an existing profile."""
        profile = self.get(user_id)
        if profile is None:
            raise ProfileNotFound()

        validate_profile(fields)

        for key, value in fields.to_columns().items():
            setattr(profile, key, value)
        profile.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(profile)

        logger.info(f"Profile updated for user {user_id}")
        return profile
