"""Daily posting quota."""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from mapdrop.repositories.message_repo import MessageStore

# Entries disappear once no caller holds or waits on the lock.
_AUTHOR_LOCKS: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()
_AUTHOR_LOCKS_GUARD = threading.Lock()


@dataclass(frozen=True)
class QuotaDecision:
    """Whether a post may proceed and how many posts remain afterwards."""

    allowed: bool
    remaining: int


class QuotaEngine:
    """Limits how many messages an author may post per calendar day.

    The count is recomputed from stored messages on every call, so there is
    no rollover job: a new day simply has no messages in its window yet.
    """

    def __init__(self, store: MessageStore, daily_limit: int) -> None:
        self.store = store
        self.daily_limit = daily_limit

    def posted_today(self, author_id: int) -> int:
        return self.store.count_by_author_today(author_id)

    def remaining(self, author_id: int) -> int:
        """Posts still available to ``author_id`` today."""
        return max(0, self.daily_limit - self.posted_today(author_id))

    def check_and_consume(self, author_id: int) -> QuotaDecision:
        """Decide whether ``author_id`` may post now.

        ``remaining`` already accounts for the post the caller is about to
        create when ``allowed`` is True.
        """
        posted = self.posted_today(author_id)
        allowed = posted < self.daily_limit
        remaining = max(0, self.daily_limit - posted - (1 if allowed else 0))
        return QuotaDecision(allowed=allowed, remaining=remaining)

    @staticmethod
    @contextmanager
    def author_lock(author_id: int) -> Iterator[None]:
        """Serialize check-then-create for one author within this process.

        Only contended when services run on several threads (sync workers,
        scripts); the async endpoints already run one call at a time per
        event loop. Other processes can still race; one extra message per
        day is the accepted worst case.
        """
        with _AUTHOR_LOCKS_GUARD:
            lock = _AUTHOR_LOCKS.get(author_id)
            if lock is None:
                lock = threading.Lock()
                _AUTHOR_LOCKS[author_id] = lock
        with lock:
            yield
