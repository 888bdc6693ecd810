"""Profile views gated by read-driven unlocks."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.core.settings import Settings, settings as default_settings
from mapdrop.models.user import User
from mapdrop.repositories.read_repo import ReadTracker
from mapdrop.schemas.user import UnlockStatus, UserProfile, UserSummary
from mapdrop.services.results import ResultStatus, ServiceResult, storage_guarded
from mapdrop.services.unlock import UnlockEngine


class ProfileService:
    """Public profile fields for everyone, private ones for self and unlocked viewers.

    Independent of the follow graph: mutual follows gate the message feed,
    unlocks gate ``name`` and ``bio``.
    """

    def __init__(self, session: Session, clock: Clock, config: Settings | None = None) -> None:
        config = config or default_settings
        self.session = session
        self.reads = ReadTracker(session, clock)
        self.unlocks = UnlockEngine(session, self.reads, clock, config.profile_unlock_threshold)

    @storage_guarded("loading the profile")
    def profile(self, viewer_id: int | None, user_id: int) -> ServiceResult:
        user = self.session.get(User, user_id)
        if user is None:
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        unlocked = viewer_id is not None and (
            viewer_id == user_id or self.unlocks.has_unlocked(viewer_id, user_id)
        )
        return ServiceResult.ok(
            UserProfile(
                id=user.id,
                nickname=user.display_nickname,
                name=user.name if unlocked else None,
                bio=user.bio if unlocked else None,
                profile_unlocked=unlocked,
            )
        )

    @storage_guarded("getting unlock status")
    def unlock_status(self, viewer_id: int, creator_id: int) -> ServiceResult:
        if self.session.get(User, creator_id) is None:
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        return ServiceResult.ok(
            UnlockStatus(
                profile_unlocked=self.unlocks.has_unlocked(viewer_id, creator_id),
                reads=self.reads.count_reads_by_user_from_creator(viewer_id, creator_id),
                threshold=self.unlocks.threshold,
            )
        )

    @storage_guarded("listing unlocked profiles")
    def unlocked_profiles(self, viewer_id: int) -> ServiceResult:
        creator_ids = self.unlocks.unlocked_creator_ids(viewer_id)
        if not creator_ids:
            return ServiceResult.ok([])
        users = {
            user.id: user
            for user in self.session.execute(select(User).where(User.id.in_(creator_ids))).scalars()
        }
        return ServiceResult.ok(
            [UserSummary.from_user(users[cid]) for cid in creator_ids if cid in users]
        )
