# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from mapdrop.core.clock import FrozenClock, get_clock
from mapdrop.core.settings import Settings
from mapdrop.db.session import Base, enable_sqlite_savepoints
from mapdrop.db.session import get_db as app_get_session
from mapdrop.main import app as fastapi_app
from mapdrop.models import Message, User

TEST_DB_URL = "sqlite://"

# A Tuesday, well away from midnight and DST changes.
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

_NICKNAMES = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits become SAVEPOINT releases inside a rolled-back transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with the documented defaults regardless of the environment."""
    return Settings(
        APP_TIMEZONE="UTC",
        DAILY_MESSAGE_LIMIT=2,
        PROFILE_UNLOCK_THRESHOLD=2,
        TOP_MESSAGES_LIMIT=10,
    )


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(app: FastAPI, db_session: Session, clock: FrozenClock) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_clock, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory creating persisted users."""

    def _make_user(name: str = "User", nickname: str | None = "", bio: str | None = None) -> User:
        if nickname == "":
            nickname = f"nick{next(_NICKNAMES)}"
        user = User(name=name, nickname=nickname, bio=bio)
        db_session.add(user)
        db_session.flush()
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("Alice Liddell", "alice", "Curiouser and curiouser")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("Bob Builder", "bob", "Can we fix it?")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("Carol Danvers", "carol")


@pytest.fixture()
def make_message(db_session: Session, clock: FrozenClock) -> Callable[..., Message]:
    """Factory inserting messages directly, bypassing the quota."""

    def _make_message(
        author: User,
        *,
        read_count: int = 0,
        created_at: datetime | None = None,
        content: str = "Hello from the map",
        latitude: float = 48.8566,
        longitude: float = 2.3522,
        tag: str | None = None,
    ) -> Message:
        message = Message(
            user_id=author.id,
            content=content,
            latitude=latitude,
            longitude=longitude,
            tag=tag,
            read_count=read_count,
            created_at=created_at or clock.now(),
        )
        db_session.add(message)
        db_session.flush()
        return message

    return _make_message

