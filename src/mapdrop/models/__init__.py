"""SQLAlchemy models for the MapDrop application."""

from .follow import Follow
from .message import Message, MessageRead
from .unlock import UnlockedProfile
from .user import User

__all__ = [
    "Follow",
    "Message", "MessageRead",
    "UnlockedProfile",
    "User",
]
