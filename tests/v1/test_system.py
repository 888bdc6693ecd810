"""Tests for the service-level endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from mapdrop import __version__


def test_health(client: TestClient) -> None:
    r = client.get("/health")

    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root(client: TestClient) -> None:
    r = client.get("/")

    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["name"] == "MapDrop API"
    assert data["version"] == __version__
    assert data["docs"] == "/docs"
