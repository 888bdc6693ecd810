"""SQLAlchemy model for user identities.

Users are owned by the identity provider; this service only reads them.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mapdrop.db.session import Base
from mapdrop.db.time import utcnow

ANONYMOUS_NICKNAME = "Anonymous"


class User(Base):
    """A registered account referenced by integer id."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    nickname: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @property
    def display_nickname(self) -> str:
        """Return the nickname shown publicly, falling back to a placeholder."""
        return self.nickname or ANONYMOUS_NICKNAME
