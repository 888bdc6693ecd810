"""Shared helpers for API tests."""

from __future__ import annotations

from mapdrop.core.security import create_access_token
from mapdrop.models import User


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
