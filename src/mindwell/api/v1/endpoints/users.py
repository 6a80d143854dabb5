"""Profile endpoints for the signed-in user."""

import logging

from fastapi import APIRouter

from mindwell.api.v1.dependencies import CurrentIdentityDep, SessionDep
from mindwell.core.security import Identity
from mindwell.models.user import UserProfile
from mindwell.schemas.user import ProfileResponse, ProfileUpdate, ProfileUpdated

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["users"])


def _profile_response(identity: Identity, profile: UserProfile | None) -> ProfileResponse:
    return ProfileResponse(
        uid=identity.uid,
        email=identity.email,
        display_name=profile.display_name if profile else None,
        handle=identity.handle,
    )


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(identity: CurrentIdentityDep, db: SessionDep) -> ProfileResponse:
    """Return the caller's identity and stored display name."""
    profile = db.get(UserProfile, identity.uid)
    return _profile_response(identity, profile)


@router.put("/profile", response_model=ProfileUpdated)
async def update_profile(
    payload: ProfileUpdate,
    identity: CurrentIdentityDep,
    db: SessionDep,
) -> ProfileUpdated:
    """Create or replace the caller's display name."""
    profile = db.get(UserProfile, identity.uid)
    if profile is None:
        profile = UserProfile(uid=identity.uid, display_name=payload.display_name)
        db.add(profile)
    else:
        profile.display_name = payload.display_name
    db.commit()
    db.refresh(profile)
    logger.info("Updated display name for %s", identity.uid)
    return ProfileUpdated(
        message="Profile updated successfully.",
        user=_profile_response(identity, profile),
    )
