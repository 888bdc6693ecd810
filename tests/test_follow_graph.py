"""Tests for the directed follow graph."""

import pytest

from mapdrop.repositories.follow_repo import FollowGraph, FollowRejection


@pytest.fixture()
def graph(db_session, clock):
    return FollowGraph(db_session, clock)


def test_self_follow_is_rejected(graph, alice) -> None:
    outcome = graph.follow(alice.id, alice.id)

    assert outcome.created is False
    assert outcome.reason is FollowRejection.SELF_FOLLOW
    assert graph.count_following(alice.id) == 0


def test_duplicate_follow_is_rejected(graph, alice, bob) -> None:
    assert graph.follow(alice.id, bob.id).created is True

    outcome = graph.follow(alice.id, bob.id)

    assert outcome.created is False
    assert outcome.reason is FollowRejection.ALREADY_FOLLOWING
    assert graph.count_followers(bob.id) == 1


def test_mutual_follow_lifecycle(graph, alice, bob) -> None:
    graph.follow(alice.id, bob.id)
    assert graph.is_mutual(alice.id, bob.id) is False
    assert graph.is_mutual(bob.id, alice.id) is False

    graph.follow(bob.id, alice.id)
    assert graph.is_mutual(alice.id, bob.id) is True
    assert graph.is_mutual(bob.id, alice.id) is True

    assert graph.unfollow(alice.id, bob.id) is True
    assert graph.is_mutual(alice.id, bob.id) is False
    assert graph.is_mutual(bob.id, alice.id) is False


def test_unfollow_without_edge_reports_nothing_removed(graph, alice, bob) -> None:
    assert graph.unfollow(alice.id, bob.id) is False


def test_followers_following_and_counts(graph, alice, bob, carol) -> None:
    graph.follow(bob.id, alice.id)
    graph.follow(carol.id, alice.id)
    graph.follow(alice.id, carol.id)

    assert set(graph.followers(alice.id)) == {bob.id, carol.id}
    assert graph.following(alice.id) == [carol.id]
    assert graph.count_followers(alice.id) == 2
    assert graph.count_following(alice.id) == 1
    assert graph.count_followers(bob.id) == 0
