"""Tests for today's ranking and the hot threshold."""

from datetime import UTC, timedelta

import pytest

from mapdrop.repositories.message_repo import MessageStore
from mapdrop.services.ranking import RankingEngine


@pytest.fixture()
def ranking(db_session, clock):
    return RankingEngine(MessageStore(db_session, clock, UTC), top_limit=10)


def test_threshold_is_zero_with_fewer_than_ten_messages(ranking, alice, make_message) -> None:
    for reads in range(9):
        make_message(alice, read_count=50 + reads)

    assert ranking.hot_threshold() == 0


def test_threshold_is_tenth_read_count(ranking, alice, make_message) -> None:
    for reads in range(20, 8, -1):  # 20..9, twelve messages
        make_message(alice, read_count=reads)

    threshold = ranking.hot_threshold()

    assert threshold == 11
    flagged = [m for m in ranking.store.query_today() if ranking.is_top_message(m, threshold)]
    assert sorted(m.read_count for m in flagged) == list(range(11, 21))


def test_threshold_with_ties_at_the_boundary(ranking, alice, make_message) -> None:
    for reads in [9, 9, 5, 5, 5, 3, 3, 1, 1, 0, 0]:
        make_message(alice, read_count=reads)

    assert ranking.hot_threshold() == 0


def test_threshold_ignores_other_days(ranking, alice, make_message, clock) -> None:
    for reads in range(10):
        make_message(alice, read_count=100 + reads, created_at=clock.now() - timedelta(days=1))
    make_message(alice, read_count=1)

    assert ranking.hot_threshold() == 0


def test_top_today_defaults_to_configured_limit(ranking, alice, make_message) -> None:
    for reads in range(15):
        make_message(alice, read_count=reads)

    top = ranking.top_today()

    assert len(top) == 10
    assert [m.read_count for m in top] == list(range(14, 4, -1))
    assert len(ranking.top_today(3)) == 3
