"""Follow graph endpoints."""

from fastapi import APIRouter

from mapdrop.schemas.user import FollowActionResponse, FollowStatus, FollowUserSummary

from ..dependencies import CurrentUserDep, FollowServiceDep
from ..responses import unwrap

router = APIRouter(prefix="/users", tags=["follows"])


@router.post("/{user_id}/follow", response_model=FollowActionResponse)
async def follow(user_id: int, current_user: CurrentUserDep, service: FollowServiceDep) -> FollowActionResponse:
    """Follow a user; self-follow and duplicate follows return 422."""
    return unwrap(service.follow(current_user.id, user_id))


@router.post("/{user_id}/unfollow", response_model=FollowActionResponse)
async def unfollow(user_id: int, current_user: CurrentUserDep, service: FollowServiceDep) -> FollowActionResponse:
    return unwrap(service.unfollow(current_user.id, user_id))


@router.get("/{user_id}/followers", response_model=list[FollowUserSummary])
async def followers(user_id: int, current_user: CurrentUserDep, service: FollowServiceDep) -> list[FollowUserSummary]:
    return unwrap(service.followers(user_id))


@router.get("/{user_id}/following", response_model=list[FollowUserSummary])
async def following(user_id: int, current_user: CurrentUserDep, service: FollowServiceDep) -> list[FollowUserSummary]:
    return unwrap(service.following(user_id))


@router.get("/{user_id}/follow-status", response_model=FollowStatus)
async def follow_status(user_id: int, current_user: CurrentUserDep, service: FollowServiceDep) -> FollowStatus:
    """How the current user and ``user_id`` relate, plus ``user_id``'s counts."""
    return unwrap(service.follow_status(current_user.id, user_id))
