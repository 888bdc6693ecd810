"""Business logic services for the MapDrop application."""

from .follows import FollowService
from .messages import MessageLifecycleService
from .profiles import ProfileService
from .quota import QuotaDecision, QuotaEngine
from .ranking import RankingEngine
from .results import ResultStatus, ServiceResult
from .unlock import UnlockDecision, UnlockEngine

__all__ = [
    "FollowService",
    "MessageLifecycleService",
    "ProfileService",
    "QuotaDecision", "QuotaEngine",
    "RankingEngine",
    "ResultStatus", "ServiceResult",
    "UnlockDecision", "UnlockEngine",
]
