"""Permanent profile unlock grants."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mapdrop.db.session import Base
from mapdrop.db.time import utcnow


class UnlockedProfile(Base):
    """``user_id`` has earned access to ``unlocked_user_id``'s private profile.

    Rows are never deleted.
    """

    __tablename__ = "unlocked_profiles"
    __table_args__ = (
        UniqueConstraint("user_id", "unlocked_user_id", name="uq_unlocked_profiles_pair"),
        CheckConstraint("user_id <> unlocked_user_id", name="ck_unlocked_profiles_not_self"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    unlocked_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
