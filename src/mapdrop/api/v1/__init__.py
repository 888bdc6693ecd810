"""Version 1 API endpoints."""

from .endpoints import follows_router, map_router, messages_router, users_router

__all__ = [
    "follows_router",
    "map_router",
    "messages_router",
    "users_router",
]
