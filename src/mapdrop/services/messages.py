"""Message lifecycle: posting, reading and the feeds built on top of them."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.core.settings import Settings, settings as default_settings
from mapdrop.models.message import Message
from mapdrop.models.user import User
from mapdrop.repositories.follow_repo import FollowGraph
from mapdrop.repositories.message_repo import MessageStore, MessageValidationError
from mapdrop.repositories.read_repo import ReadTracker
from mapdrop.schemas.message import (
    MapMessage,
    MessageCreate,
    MessageResponse,
    PostMessageResponse,
    ReadMessageResponse,
    RemainingResponse,
)
from mapdrop.services.quota import QuotaEngine
from mapdrop.services.ranking import RankingEngine
from mapdrop.services.results import ResultStatus, ServiceResult, storage_guarded
from mapdrop.services.unlock import UnlockEngine

logger = logging.getLogger(__name__)


class MessageLifecycleService:
    """Orchestrates quota, storage, read tracking, unlocks and ranking.

    One instance per request/session. ``post_message`` and ``read_message``
    each commit exactly once; on a storage failure the whole unit is rolled
    back, and because a read is recorded at most once a client may simply
    retry.
    """

    def __init__(self, session: Session, clock: Clock, config: Settings | None = None) -> None:
        config = config or default_settings
        self.session = session
        self.store = MessageStore(session, clock, config.tzinfo)
        self.reads = ReadTracker(session, clock)
        self.follows = FollowGraph(session, clock)
        self.quota = QuotaEngine(self.store, config.daily_message_limit)
        self.unlocks = UnlockEngine(session, self.reads, clock, config.profile_unlock_threshold)
        self.ranking = RankingEngine(self.store, config.top_messages_limit)

    @storage_guarded("creating the message")
    def post_message(self, author_id: int, payload: MessageCreate) -> ServiceResult:
        """Create a message if the author still has quota today."""
        with self.quota.author_lock(author_id):
            decision = self.quota.check_and_consume(author_id)
            if not decision.allowed:
                logger.warning("User %s hit the daily message limit", author_id)
                return ServiceResult.failure(
                    ResultStatus.QUOTA_EXCEEDED,
                    "Daily message limit reached",
                    data={"remaining": 0},
                )
            try:
                message = self.store.create(
                    author_id=author_id,
                    content=payload.content,
                    latitude=payload.latitude,
                    longitude=payload.longitude,
                    tag=payload.tag,
                )
            except MessageValidationError as exc:
                self.session.rollback()
                return ServiceResult.failure(ResultStatus.INVALID, str(exc))
            self.session.commit()

        logger.info("User %s posted message %s", author_id, message.id)
        return ServiceResult.created(
            PostMessageResponse(
                message=MessageResponse.from_message(message),
                remaining=decision.remaining,
            )
        )

    @storage_guarded("marking the message as read")
    def read_message(self, viewer_id: int, message_id: int) -> ServiceResult:
        """Record a read, bump the counter on the first one, and re-check the unlock."""
        message = self.store.get(message_id)
        if message is None:
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "Message not found")
        if message.user_id == viewer_id:
            return ServiceResult.failure(ResultStatus.REJECTED, "Cannot read own message")

        record = self.reads.record_read(viewer_id, message_id)
        if record.is_new_read:
            self.store.increment_read_count(message_id)
        decision = self.unlocks.evaluate_and_maybe_unlock(viewer_id, message.user_id)
        new_read_count = self.store.read_count(message_id) or 0
        self.session.commit()

        if record.is_new_read:
            logger.info(
                "User %s read message %s (read_count=%d)", viewer_id, message_id, new_read_count
            )
        return ServiceResult.ok(
            ReadMessageResponse(
                profile_unlocked=decision.unlocked,
                new_read_count=new_read_count,
                is_new_read=record.is_new_read,
            )
        )

    @storage_guarded("loading the user's messages")
    def feed_for(self, viewer_id: int, creator_id: int) -> ServiceResult:
        """Return the creator's full history, newest first, to mutual followers only."""
        if self.session.get(User, creator_id) is None:
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        if not self.follows.is_mutual(viewer_id, creator_id):
            return ServiceResult.failure(ResultStatus.NOT_AUTHORIZED, "Not authorized")
        return ServiceResult.ok(self._serialize(self.store.query_by_author(creator_id)))

    @storage_guarded("getting today's messages")
    def today_messages(self) -> ServiceResult:
        return ServiceResult.ok(self._serialize(self.store.query_today()))

    @storage_guarded("getting top messages today")
    def top_messages_today(self, limit: int | None = None) -> ServiceResult:
        return ServiceResult.ok(self._serialize(self.ranking.top_today(limit)))

    @storage_guarded("getting remaining messages")
    def remaining_for(self, author_id: int) -> ServiceResult:
        return ServiceResult.ok(RemainingResponse(remaining=self.quota.remaining(author_id)))

    @storage_guarded("getting my messages today")
    def my_messages_today(self, author_id: int) -> ServiceResult:
        return ServiceResult.ok(self._serialize(self.store.query_by_author_today(author_id)))

    @storage_guarded("getting my messages")
    def my_messages(self, author_id: int) -> ServiceResult:
        return ServiceResult.ok(self._serialize(self.store.query_by_author(author_id)))

    @storage_guarded("getting map messages")
    def map_messages(self, viewer_id: int | None) -> ServiceResult:
        """Today's messages annotated for the viewer.

        Anonymous viewers get ``user_has_read=False`` everywhere; the top
        flag does not depend on the viewer.
        """
        messages = self.store.query_today()
        threshold = self.ranking.hot_threshold()
        read_ids: set[int] = set()
        if viewer_id is not None:
            read_ids = self.reads.read_message_ids(viewer_id, (m.id for m in messages))

        data = [
            MapMessage(
                **MessageResponse.from_message(message).model_dump(),
                user_has_read=message.id in read_ids,
                is_top_message=self.ranking.is_top_message(message, threshold),
            )
            for message in messages
        ]
        return ServiceResult.ok(data)

    @staticmethod
    def _serialize(messages: list[Message]) -> list[MessageResponse]:
        return [MessageResponse.from_message(message) for message in messages]
