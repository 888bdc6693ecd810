"""User profile and feed endpoints."""

from fastapi import APIRouter

from mapdrop.schemas.message import MessageResponse
from mapdrop.schemas.user import UnlockStatus, UserProfile, UserSummary

from ..dependencies import (
    CurrentUserDep,
    MessageServiceDep,
    OptionalUserDep,
    ProfileServiceDep,
)
from ..responses import unwrap

router = APIRouter(prefix="/users", tags=["users"])


# Routes under /users/me must be registered before /users/{user_id}.
@router.get("/me/messages", response_model=list[MessageResponse])
async def my_messages(current_user: CurrentUserDep, service: MessageServiceDep) -> list[MessageResponse]:
    """All of the current user's messages, newest first."""
    return unwrap(service.my_messages(current_user.id))


@router.get("/me/unlocked", response_model=list[UserSummary])
async def my_unlocked_profiles(
    current_user: CurrentUserDep,
    service: ProfileServiceDep,
) -> list[UserSummary]:
    """Creators whose profiles the current user has unlocked."""
    return unwrap(service.unlocked_profiles(current_user.id))


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(user_id: int, viewer: OptionalUserDep, service: ProfileServiceDep) -> UserProfile:
    """Public profile; private fields appear once the viewer has unlocked it."""
    return unwrap(service.profile(viewer.id if viewer else None, user_id))


@router.get("/{user_id}/messages", response_model=list[MessageResponse])
async def user_messages(
    user_id: int,
    current_user: CurrentUserDep,
    service: MessageServiceDep,
) -> list[MessageResponse]:
    """A user's message history; 403 unless the follow is mutual."""
    return unwrap(service.feed_for(current_user.id, user_id))


@router.get("/{user_id}/unlock-status", response_model=UnlockStatus)
async def unlock_status(
    user_id: int,
    current_user: CurrentUserDep,
    service: ProfileServiceDep,
) -> UnlockStatus:
    """Reads so far towards unlocking ``user_id``'s profile."""
    return unwrap(service.unlock_status(current_user.id, user_id))
