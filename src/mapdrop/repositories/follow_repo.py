"""Directed follow graph between users."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.models.follow import Follow

__all__ = ["FollowGraph", "FollowOutcome", "FollowRejection"]

logger = logging.getLogger(__name__)


class FollowRejection(str, enum.Enum):
    """Reasons a follow request is refused."""

    SELF_FOLLOW = "self_follow"
    ALREADY_FOLLOWING = "already_following"


@dataclass(frozen=True)
class FollowOutcome:
    """Either a created edge or a rejection with its reason."""

    created: bool
    reason: FollowRejection | None = None

    @classmethod
    def success(cls) -> FollowOutcome:
        return cls(created=True)

    @classmethod
    def rejected(cls, reason: FollowRejection) -> FollowOutcome:
        return cls(created=False, reason=reason)


class FollowGraph:
    """Edge store answering follow and mutual-follow questions."""

    def __init__(self, session: Session, clock: Clock) -> None:
        self.session = session
        self.clock = clock

    def follow(self, follower_id: int, following_id: int) -> FollowOutcome:
        """Create the edge ``follower_id -> following_id`` if allowed."""
        if follower_id == following_id:
            return FollowOutcome.rejected(FollowRejection.SELF_FOLLOW)
        if self.is_following(follower_id, following_id):
            return FollowOutcome.rejected(FollowRejection.ALREADY_FOLLOWING)
        try:
            with self.session.begin_nested():
                self.session.add(
                    Follow(
                        follower_id=follower_id,
                        following_id=following_id,
                        created_at=self.clock.now(),
                    )
                )
        except IntegrityError:
            # Lost a race with an identical follow request.
            return FollowOutcome.rejected(FollowRejection.ALREADY_FOLLOWING)
        logger.info("User %s followed user %s", follower_id, following_id)
        return FollowOutcome.success()

    def unfollow(self, follower_id: int, following_id: int) -> bool:
        """Remove the edge; returns True if one was deleted."""
        result = self.session.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        removed = result.rowcount > 0
        if removed:
            logger.info("User %s unfollowed user %s", follower_id, following_id)
        return removed

    def is_following(self, follower_id: int, following_id: int) -> bool:
        stmt = select(
            exists().where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def is_mutual(self, user_a: int, user_b: int) -> bool:
        """True iff both directed edges exist."""
        return self.is_following(user_a, user_b) and self.is_following(user_b, user_a)

    def followers(self, user_id: int) -> list[int]:
        """Return ids of users following ``user_id``."""
        stmt = select(Follow.follower_id).where(Follow.following_id == user_id).order_by(Follow.id)
        return list(self.session.execute(stmt).scalars())

    def following(self, user_id: int) -> list[int]:
        """Return ids of users that ``user_id`` follows."""
        stmt = select(Follow.following_id).where(Follow.follower_id == user_id).order_by(Follow.id)
        return list(self.session.execute(stmt).scalars())

    def count_followers(self, user_id: int) -> int:
        stmt = select(func.count(Follow.id)).where(Follow.following_id == user_id)
        return int(self.session.execute(stmt).scalar_one())

    def count_following(self, user_id: int) -> int:
        stmt = select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        return int(self.session.execute(stmt).scalar_one())
