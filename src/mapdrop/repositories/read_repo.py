"""Read tracking: which user has opened which message."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.models.message import Message, MessageRead

__all__ = ["ReadRecord", "ReadTracker"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadRecord:
    """Outcome of :meth:`ReadTracker.record_read`."""

    is_new_read: bool


class ReadTracker:
    """Records reads with an at-most-once guarantee per (user, message)."""

    def __init__(self, session: Session, clock: Clock) -> None:
        self.session = session
        self.clock = clock

    def record_read(self, user_id: int, message_id: int) -> ReadRecord:
        """Insert a read event unless one already exists for the pair.

        The unique constraint decides the winner: the insert runs inside a
        SAVEPOINT and a constraint violation rolls back only that savepoint.
        Among concurrent duplicate calls exactly one sees ``is_new_read=True``.
        """
        try:
            with self.session.begin_nested():
                self.session.add(
                    MessageRead(
                        user_id=user_id,
                        message_id=message_id,
                        created_at=self.clock.now(),
                    )
                )
        except IntegrityError:
            logger.debug("User %s already read message %s", user_id, message_id)
            return ReadRecord(is_new_read=False)
        return ReadRecord(is_new_read=True)

    def has_read(self, user_id: int, message_id: int) -> bool:
        """Return True if ``user_id`` has a read event for ``message_id``."""
        stmt = select(
            exists().where(
                MessageRead.user_id == user_id,
                MessageRead.message_id == message_id,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def read_message_ids(self, user_id: int, message_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``message_ids`` that ``user_id`` has read."""
        ids = list(message_ids)
        if not ids:
            return set()
        stmt = select(MessageRead.message_id).where(
            MessageRead.user_id == user_id,
            MessageRead.message_id.in_(ids),
        )
        return set(self.session.execute(stmt).scalars())

    def count_reads_by_user_from_creator(self, user_id: int, creator_id: int) -> int:
        """Count distinct messages by ``creator_id`` that ``user_id`` has read."""
        stmt = (
            select(func.count(func.distinct(MessageRead.message_id)))
            .join(Message, Message.id == MessageRead.message_id)
            .where(MessageRead.user_id == user_id, Message.user_id == creator_id)
        )
        return int(self.session.execute(stmt).scalar_one())

    def count_reads_for_message(self, message_id: int) -> int:
        """Count read events recorded against ``message_id``."""
        stmt = select(func.count(MessageRead.id)).where(MessageRead.message_id == message_id)
        return int(self.session.execute(stmt).scalar_one())
