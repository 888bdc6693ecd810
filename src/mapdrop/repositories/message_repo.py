"""Data access helpers for working with messages."""
from __future__ import annotations

import math
from datetime import datetime, tzinfo

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock, day_window
from mapdrop.models.message import MAX_CONTENT_LENGTH, MAX_TAG_LENGTH, Message

__all__ = ["MessageStore", "MessageValidationError"]


class MessageValidationError(ValueError):
    """Raised when message fields fall outside the storage bounds."""


def _validate(content: str, latitude: float, longitude: float, tag: str | None) -> None:
    if not content or not content.strip():
        raise MessageValidationError("content must not be empty")
    if len(content) > MAX_CONTENT_LENGTH:
        raise MessageValidationError(f"content must be at most {MAX_CONTENT_LENGTH} characters")
    for name, value, bound in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if not math.isfinite(value) or not -bound <= value <= bound:
            raise MessageValidationError(f"{name} must be between {-bound:g} and {bound:g}")
    if tag is not None and len(tag) > MAX_TAG_LENGTH:
        raise MessageValidationError(f"tag must be at most {MAX_TAG_LENGTH} characters")


class MessageStore:
    """Persistence for messages and their read counters.

    "Today" is always the calendar day, in ``tz``, that contains
    ``clock.now()`` at the moment of the call.
    """

    def __init__(self, session: Session, clock: Clock, tz: tzinfo) -> None:
        self.session = session
        self.clock = clock
        self.tz = tz

    def today_window(self) -> tuple[datetime, datetime]:
        """Return the UTC bounds of the current calendar day."""
        return day_window(self.clock.now(), self.tz)

    def create(
        self,
        *,
        author_id: int,
        content: str,
        latitude: float,
        longitude: float,
        tag: str | None = None,
    ) -> Message:
        """Insert a new message and return the persisted ORM instance.

        The caller owns the transaction; this only flushes.

        Raises:
            MessageValidationError: If any field is out of bounds.
        """
        _validate(content, latitude, longitude, tag)
        message = Message(
            user_id=author_id,
            content=content,
            latitude=float(latitude),
            longitude=float(longitude),
            tag=tag,
            read_count=0,
            created_at=self.clock.now(),
        )
        self.session.add(message)
        self.session.flush()
        return message

    def get(self, message_id: int) -> Message | None:
        """Return a message by identifier."""
        return self.session.get(Message, message_id)

    def increment_read_count(self, message_id: int) -> int:
        """Atomically add one to the read counter in the database.

        Returns:
            Number of rows updated; 0 means the message does not exist.
        """
        result = self.session.execute(
            update(Message)
            .where(Message.id == message_id)
            .values(read_count=Message.read_count + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def read_count(self, message_id: int) -> int | None:
        """Return the stored counter, bypassing any loaded ORM state."""
        return self.session.execute(
            select(Message.read_count).where(Message.id == message_id)
        ).scalar_one_or_none()

    def _today_query(self):
        start, end = self.today_window()
        return select(Message).where(Message.created_at >= start, Message.created_at < end)

    def query_today(self) -> list[Message]:
        """Return today's messages, oldest first."""
        stmt = self._today_query().order_by(Message.created_at.asc(), Message.id.asc())
        return list(self.session.execute(stmt).scalars())

    def _ranked_today(self):
        # Ties on read_count go to the earlier message, then the lower id.
        return self._today_query().order_by(
            Message.read_count.desc(),
            Message.created_at.asc(),
            Message.id.asc(),
        )

    def query_top_today(self, limit: int) -> list[Message]:
        """Return today's most-read messages."""
        stmt = self._ranked_today().limit(limit)
        return list(self.session.execute(stmt).scalars())

    def read_count_at_rank(self, position: int) -> int | None:
        """Return the read count at a 0-based position of today's ranking."""
        stmt = self._ranked_today().offset(position).limit(1)
        message = self.session.execute(stmt).scalars().first()
        return None if message is None else message.read_count

    def count_by_author_today(self, author_id: int) -> int:
        """Count messages posted by ``author_id`` within today's window."""
        start, end = self.today_window()
        stmt = select(func.count(Message.id)).where(
            Message.user_id == author_id,
            Message.created_at >= start,
            Message.created_at < end,
        )
        return int(self.session.execute(stmt).scalar_one())

    def query_by_author(self, author_id: int) -> list[Message]:
        """Return every message by ``author_id``, newest first."""
        stmt = (
            select(Message)
            .where(Message.user_id == author_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def query_by_author_today(self, author_id: int) -> list[Message]:
        """Return today's messages by ``author_id``, newest first."""
        stmt = (
            self._today_query()
            .where(Message.user_id == author_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return list(self.session.execute(stmt).scalars())
