"""Pydantic schemas for request and response bodies."""

from .message import (
    MapMessage,
    MessageCreate,
    MessageResponse,
    PostMessageResponse,
    ReadMessageResponse,
    RemainingResponse,
)
from .user import (
    FollowActionResponse,
    FollowStatus,
    FollowUserSummary,
    UnlockStatus,
    UserProfile,
    UserSummary,
)

__all__ = [
    "MapMessage",
    "MessageCreate",
    "MessageResponse",
    "PostMessageResponse",
    "ReadMessageResponse",
    "RemainingResponse",
    "FollowActionResponse",
    "FollowStatus",
    "FollowUserSummary",
    "UnlockStatus",
    "UserProfile",
    "UserSummary",
]
