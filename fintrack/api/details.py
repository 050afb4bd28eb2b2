"""Investor profile ("user details") API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fintrack.api.dependencies import Identity, get_current_identity, get_profile_service
from fintrack.database import get_db
from fintrack.errors import AccountNotFound
from fintrack.models.user import User
from fintrack.schemas.profile import (
    DetailsLookupResponse,
    DetailsSavedResponse,
    ProfileFields,
    ProfileResponse,
)
from fintrack.services.profile import ProfileService

router = APIRouter(prefix="/api/user", tags=["details"])


@router.get("/details", response_model=DetailsLookupResponse)
async def get_details(
    identity: Annotated[Identity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get the current user's profile, if onboarding is complete."""
    profile = profiles.get(identity.user_id)
    if profile is None:
        return DetailsLookupResponse(exists=False)
    return DetailsLookupResponse(exists=True, details=ProfileResponse.model_validate(profile))


@router.post("/details", response_model=DetailsSavedResponse)
async def create_details(
    fields: ProfileFields,
    identity: Annotated[Identity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
    db: Annotated[Session, Depends(get_db)],
):
    """Submit the profile for the first time."""
    user = db.get(User, identity.user_id)
    if user is None:
        raise AccountNotFound()

    profile = profiles.create(user.id, user.email, fields)
    return DetailsSavedResponse(
        message="User details saved successfully",
        details=ProfileResponse.model_validate(profile),
    )


@router.put("/details", response_model=DetailsSavedResponse)
async def update_details(
    fields: ProfileFields,
    identity: Annotated[Identity, Depends(get_current_identity)],
    profiles: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Replace the existing profile."""
    profile = profiles.update(identity.user_id, fields)
    return DetailsSavedResponse(
        message="User details updated successfully",
        details=ProfileResponse.model_validate(profile),
    )
