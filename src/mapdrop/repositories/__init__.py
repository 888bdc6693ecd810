"""Data access layer for MapDrop entities."""

from .follow_repo import FollowGraph, FollowOutcome, FollowRejection
from .message_repo import MessageStore, MessageValidationError
from .read_repo import ReadRecord, ReadTracker

__all__ = [
    "FollowGraph", "FollowOutcome", "FollowRejection",
    "MessageStore", "MessageValidationError",
    "ReadRecord", "ReadTracker",
]
