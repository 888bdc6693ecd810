"""Models for geotagged messages and the reads recorded against them."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mapdrop.db.session import Base
from mapdrop.db.time import utcnow
from mapdrop.models.user import User

MAX_CONTENT_LENGTH = 500
MAX_TAG_LENGTH = 50


class Message(Base):
    """A short text dropped at a point on the map.

    Only ``read_count`` ever changes after creation, and only through
    ``MessageStore.increment_read_count``.
    """

    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("read_count >= 0", name="ck_messages_read_count_non_negative"),
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="ck_messages_latitude"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="ck_messages_longitude"),
        Index("ix_messages_user_id_created_at", "user_id", "created_at"),
        Index("ix_messages_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(String(MAX_CONTENT_LENGTH), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    tag: Mapped[str | None] = mapped_column(String(MAX_TAG_LENGTH), nullable=True)
    # Denormalized count of MessageRead rows for this message.
    read_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined")


class MessageRead(Base):
    """First view of a message by a user; at most one row per pair."""

    __tablename__ = "message_reads"
    __table_args__ = (
        UniqueConstraint("user_id", "message_id", name="uq_message_reads_user_message"),
        Index("ix_message_reads_message_id_created_at", "message_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    message_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
