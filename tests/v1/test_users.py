"""Tests for profile, feed and unlock endpoints."""

from fastapi import status

from tests.helpers import auth_headers


def _read(client, reader, message) -> None:
    r = client.post(f"/api/v1/messages/{message.id}/read", headers=auth_headers(reader))
    assert r.status_code == status.HTTP_200_OK


def test_profile_is_locked_until_enough_reads(client, alice, bob, make_message) -> None:
    r = client.get(f"/api/v1/users/{alice.id}", headers=auth_headers(bob))
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {
        "id": alice.id,
        "nickname": "alice",
        "name": None,
        "bio": None,
        "profile_unlocked": False,
    }

    _read(client, bob, make_message(alice))
    _read(client, bob, make_message(alice))

    data = client.get(f"/api/v1/users/{alice.id}", headers=auth_headers(bob)).json()
    assert data["profile_unlocked"] is True
    assert data["name"] == "Alice Liddell"
    assert data["bio"] == "Curiouser and curiouser"


def test_anonymous_profile_view(client, alice) -> None:
    r = client.get(f"/api/v1/users/{alice.id}")

    assert r.status_code == status.HTTP_200_OK
    assert r.json()["name"] is None


def test_unknown_profile(client) -> None:
    assert client.get("/api/v1/users/99999").status_code == status.HTTP_404_NOT_FOUND


def test_feed_is_gated_by_mutual_follow(client, alice, bob, make_message) -> None:
    make_message(alice, content="for friends only")
    url = f"/api/v1/users/{alice.id}/messages"

    client.post(f"/api/v1/users/{alice.id}/follow", headers=auth_headers(bob))
    r = client.get(url, headers=auth_headers(bob))
    assert r.status_code == status.HTTP_403_FORBIDDEN
    assert r.json()["detail"] == "Not authorized"

    client.post(f"/api/v1/users/{bob.id}/follow", headers=auth_headers(alice))
    r = client.get(url, headers=auth_headers(bob))
    assert r.status_code == status.HTTP_200_OK
    assert [m["content"] for m in r.json()] == ["for friends only"]


def test_feed_requires_authentication(client, alice) -> None:
    r = client.get(f"/api/v1/users/{alice.id}/messages")

    assert r.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_my_messages_and_unlocked(client, alice, bob, carol, make_message) -> None:
    make_message(bob, content="mine")
    _read(client, bob, make_message(carol))
    _read(client, bob, make_message(carol))

    mine = client.get("/api/v1/users/me/messages", headers=auth_headers(bob)).json()
    assert [m["content"] for m in mine] == ["mine"]

    unlocked = client.get("/api/v1/users/me/unlocked", headers=auth_headers(bob)).json()
    assert unlocked == [{"id": carol.id, "nickname": "carol"}]

    empty = client.get("/api/v1/users/me/unlocked", headers=auth_headers(alice)).json()
    assert empty == []


def test_unlock_status(client, alice, bob, make_message) -> None:
    _read(client, bob, make_message(alice))

    r = client.get(f"/api/v1/users/{alice.id}/unlock-status", headers=auth_headers(bob))

    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"profile_unlocked": False, "reads": 1, "threshold": 2}
