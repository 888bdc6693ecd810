"""Ranking of today's messages by read count."""

from __future__ import annotations

from mapdrop.models.message import Message
from mapdrop.repositories.message_repo import MessageStore


class RankingEngine:
    """Top-N list and the "hot" threshold, both computed on demand.

    The two are separate queries, so under concurrent writes the threshold
    and the list may briefly disagree. The flag is a display hint only.
    """

    def __init__(self, store: MessageStore, top_limit: int) -> None:
        self.store = store
        self.top_limit = top_limit

    def top_today(self, limit: int | None = None) -> list[Message]:
        return self.store.query_top_today(self.top_limit if limit is None else limit)

    def hot_threshold(self) -> int:
        """Read count of the ``top_limit``-th ranked message today, or 0 if there are fewer."""
        value = self.store.read_count_at_rank(self.top_limit - 1)
        return 0 if value is None else value

    @staticmethod
    def is_top_message(message: Message, threshold: int) -> bool:
        return message.read_count >= threshold
