"""API endpoint modules for version 1."""

from .follows import router as follows_router
from .map import router as map_router
from .messages import router as messages_router
from .users import router as users_router

__all__ = [
    "follows_router",
    "map_router",
    "messages_router",
    "users_router",
]
