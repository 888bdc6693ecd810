"""Tests for read-driven profile unlocks."""

import pytest

from mapdrop.models import UnlockedProfile
from mapdrop.repositories.read_repo import ReadTracker
from mapdrop.services.unlock import UnlockEngine


@pytest.fixture()
def tracker(db_session, clock):
    return ReadTracker(db_session, clock)


@pytest.fixture()
def engine_(db_session, tracker, clock):
    return UnlockEngine(db_session, tracker, clock, threshold=2)


def _grants(db_session, viewer, creator) -> int:
    return (
        db_session.query(UnlockedProfile)
        .filter_by(user_id=viewer.id, unlocked_user_id=creator.id)
        .count()
    )


def test_one_read_is_not_enough(engine_, tracker, alice, bob, make_message) -> None:
    tracker.record_read(bob.id, make_message(alice).id)

    decision = engine_.evaluate_and_maybe_unlock(bob.id, alice.id)

    assert decision.unlocked is False
    assert engine_.has_unlocked(bob.id, alice.id) is False


def test_two_reads_unlock_once(engine_, tracker, db_session, alice, bob, make_message) -> None:
    messages = [make_message(alice) for _ in range(3)]
    tracker.record_read(bob.id, messages[0].id)
    tracker.record_read(bob.id, messages[1].id)

    first = engine_.evaluate_and_maybe_unlock(bob.id, alice.id)
    assert first.unlocked is True
    assert first.newly_granted is True

    tracker.record_read(bob.id, messages[2].id)
    again = engine_.evaluate_and_maybe_unlock(bob.id, alice.id)
    assert again.unlocked is True
    assert again.newly_granted is False

    assert engine_.has_unlocked(bob.id, alice.id) is True
    assert _grants(db_session, bob, alice) == 1


def test_unlock_is_directional(engine_, tracker, alice, bob, make_message) -> None:
    for _ in range(2):
        tracker.record_read(bob.id, make_message(alice).id)
    engine_.evaluate_and_maybe_unlock(bob.id, alice.id)

    assert engine_.has_unlocked(alice.id, bob.id) is False


def test_self_unlock_is_a_no_op(engine_, db_session, alice, mocker) -> None:
    count_reads = mocker.spy(engine_.read_tracker, "count_reads_by_user_from_creator")

    decision = engine_.evaluate_and_maybe_unlock(alice.id, alice.id)

    assert decision.unlocked is False
    count_reads.assert_not_called()
    assert _grants(db_session, alice, alice) == 0


def test_threshold_is_configurable(db_session, tracker, clock, alice, bob, make_message) -> None:
    strict = UnlockEngine(db_session, tracker, clock, threshold=3)
    for _ in range(2):
        tracker.record_read(bob.id, make_message(alice).id)

    assert strict.evaluate_and_maybe_unlock(bob.id, alice.id).unlocked is False


def test_unlocked_creator_ids(engine_, tracker, alice, bob, carol, make_message) -> None:
    for creator in (carol, alice):
        for _ in range(2):
            tracker.record_read(bob.id, make_message(creator).id)
        engine_.evaluate_and_maybe_unlock(bob.id, creator.id)

    assert engine_.unlocked_creator_ids(bob.id) == [carol.id, alice.id]
