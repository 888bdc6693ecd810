"""Follow operations exposed to the API."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock
from mapdrop.models.user import User
from mapdrop.repositories.follow_repo import FollowGraph, FollowRejection
from mapdrop.schemas.user import FollowActionResponse, FollowStatus, FollowUserSummary
from mapdrop.services.results import ResultStatus, ServiceResult, storage_guarded

REJECTION_MESSAGES = {
    FollowRejection.SELF_FOLLOW: "You cannot follow yourself",
    FollowRejection.ALREADY_FOLLOWING: "Already following this user",
}


class FollowService:
    """Wraps :class:`FollowGraph` in service results."""

    def __init__(self, session: Session, clock: Clock) -> None:
        self.session = session
        self.graph = FollowGraph(session, clock)

    def _exists(self, user_id: int) -> bool:
        return self.session.get(User, user_id) is not None

    @storage_guarded("following the user")
    def follow(self, follower_id: int, following_id: int) -> ServiceResult:
        if not self._exists(following_id):
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        outcome = self.graph.follow(follower_id, following_id)
        if not outcome.created:
            return ServiceResult.failure(ResultStatus.REJECTED, REJECTION_MESSAGES[outcome.reason])
        is_mutual = self.graph.is_mutual(follower_id, following_id)
        self.session.commit()
        return ServiceResult.ok(
            FollowActionResponse(
                message="User followed successfully",
                is_following=True,
                is_mutual=is_mutual,
            )
        )

    @storage_guarded("unfollowing the user")
    def unfollow(self, follower_id: int, following_id: int) -> ServiceResult:
        if not self._exists(following_id):
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        self.graph.unfollow(follower_id, following_id)
        self.session.commit()
        return ServiceResult.ok(
            FollowActionResponse(
                message="User unfollowed successfully",
                is_following=False,
                is_mutual=False,
            )
        )

    @storage_guarded("getting follow status")
    def follow_status(self, viewer_id: int, target_id: int) -> ServiceResult:
        if not self._exists(target_id):
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        is_following = self.graph.is_following(viewer_id, target_id)
        is_followed_by = self.graph.is_following(target_id, viewer_id)
        return ServiceResult.ok(
            FollowStatus(
                is_following=is_following,
                is_followed_by=is_followed_by,
                is_mutual=is_following and is_followed_by,
                followers_count=self.graph.count_followers(target_id),
                following_count=self.graph.count_following(target_id),
            )
        )

    @storage_guarded("getting followers")
    def followers(self, user_id: int) -> ServiceResult:
        if not self._exists(user_id):
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        return ServiceResult.ok(self._summaries(user_id, self.graph.followers(user_id)))

    @storage_guarded("getting following")
    def following(self, user_id: int) -> ServiceResult:
        if not self._exists(user_id):
            return ServiceResult.failure(ResultStatus.NOT_FOUND, "User not found")
        return ServiceResult.ok(self._summaries(user_id, self.graph.following(user_id)))

    def _summaries(self, user_id: int, other_ids: list[int]) -> list[FollowUserSummary]:
        if not other_ids:
            return []
        users = {
            user.id: user
            for user in self.session.execute(select(User).where(User.id.in_(other_ids))).scalars()
        }
        return [
            FollowUserSummary(
                id=other.id,
                name=other.name,
                nickname=other.nickname,
                bio=other.bio,
                is_mutual=self.graph.is_mutual(user_id, other.id),
            )
            for other in (users[other_id] for other_id in other_ids if other_id in users)
        ]
