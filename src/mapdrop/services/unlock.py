"""Profile unlocks earned by reading a creator's messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.models.unlock import UnlockedProfile
from mapdrop.repositories.read_repo import ReadTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnlockDecision:
    """``unlocked`` reports the current state; ``newly_granted`` marks this call's insert."""

    unlocked: bool
    newly_granted: bool = False


class UnlockEngine:
    """Grants permanent access to a creator's private profile fields."""

    def __init__(
        self,
        session: Session,
        read_tracker: ReadTracker,
        clock: Clock,
        threshold: int,
    ) -> None:
        self.session = session
        self.read_tracker = read_tracker
        self.clock = clock
        self.threshold = threshold

    def has_unlocked(self, viewer_id: int, creator_id: int) -> bool:
        stmt = select(
            exists().where(
                UnlockedProfile.user_id == viewer_id,
                UnlockedProfile.unlocked_user_id == creator_id,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def evaluate_and_maybe_unlock(self, viewer_id: int, creator_id: int) -> UnlockDecision:
        """Create the grant once the viewer has read enough of the creator's messages.

        Self-unlock is a no-op. An existing grant is reported as unlocked
        without inserting again.
        """
        if viewer_id == creator_id:
            return UnlockDecision(unlocked=False)
        if self.has_unlocked(viewer_id, creator_id):
            return UnlockDecision(unlocked=True)

        reads = self.read_tracker.count_reads_by_user_from_creator(viewer_id, creator_id)
        if reads < self.threshold:
            return UnlockDecision(unlocked=False)

        try:
            with self.session.begin_nested():
                self.session.add(
                    UnlockedProfile(
                        user_id=viewer_id,
                        unlocked_user_id=creator_id,
                        created_at=self.clock.now(),
                    )
                )
        except IntegrityError:
            # A concurrent read by the same viewer inserted the grant first.
            return UnlockDecision(unlocked=True)

        logger.info(
            "User %s unlocked profile of user %s after %d reads", viewer_id, creator_id, reads
        )
        return UnlockDecision(unlocked=True, newly_granted=True)

    def unlocked_creator_ids(self, viewer_id: int) -> list[int]:
        """Return creators whose profiles ``viewer_id`` has unlocked, oldest grant first."""
        stmt = (
            select(UnlockedProfile.unlocked_user_id)
            .where(UnlockedProfile.user_id == viewer_id)
            .order_by(UnlockedProfile.id)
        )
        return list(self.session.execute(stmt).scalars())
