"""User, follow and unlock schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mapdrop.models.user import User


class UserSummary(BaseModel):
    """Public identity shown next to a message."""

    id: int
    nickname: str

    @classmethod
    def from_user(cls, user: User) -> UserSummary:
        return cls(id=user.id, nickname=user.display_nickname)


class UserProfile(BaseModel):
    """Profile view; ``name`` and ``bio`` are only filled once unlocked."""

    id: int
    nickname: str
    name: str | None = None
    bio: str | None = None
    profile_unlocked: bool = Field(
        ..., description="True when the viewer may see the private fields"
    )


class FollowUserSummary(BaseModel):
    """Entry in a followers/following list."""

    id: int
    name: str
    nickname: str | None
    bio: str | None
    is_mutual: bool


class FollowActionResponse(BaseModel):
    """Result of a follow or unfollow request."""

    message: str
    is_following: bool
    is_mutual: bool


class FollowStatus(BaseModel):
    """Relationship between the viewer and a target user, plus target counts."""

    is_following: bool
    is_followed_by: bool
    is_mutual: bool
    followers_count: int
    following_count: int


class UnlockStatus(BaseModel):
    """Progress towards unlocking a creator's profile."""

    profile_unlocked: bool
    reads: int
    threshold: int
