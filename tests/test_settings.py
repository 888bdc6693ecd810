"""Tests for environment-driven settings."""

from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from mapdrop.core.settings import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("APP_TIMEZONE", "DAILY_MESSAGE_LIMIT", "PROFILE_UNLOCK_THRESHOLD", "TOP_MESSAGES_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)

    assert config.timezone == "UTC"
    assert config.daily_message_limit == 2
    assert config.profile_unlock_threshold == 2
    assert config.top_messages_limit == 10


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("APP_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("DAILY_MESSAGE_LIMIT", "5")

    config = Settings(_env_file=None)

    assert config.tzinfo == ZoneInfo("Asia/Tokyo")
    assert config.daily_message_limit == 5


def test_unknown_timezone_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, APP_TIMEZONE="Mars/Olympus_Mons")


def test_unlock_threshold_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, PROFILE_UNLOCK_THRESHOLD=0)


def test_testing_database_override() -> None:
    config = Settings(
        _env_file=None,
        DATABASE_URL="postgresql+psycopg://app@db/mapdrop",
        TEST_DATABASE_URL="sqlite:///./test.db",
        USE_TEST_DATABASE=True,
    )

    assert config.effective_database_url == "sqlite:///./test.db"

    config.use_testing_database = False
    assert config.effective_database_url == "postgresql+psycopg://app@db/mapdrop"


def test_version_comes_from_the_package(monkeypatch) -> None:
    monkeypatch.setenv("APP_VERSION", "9.9.9")

    config = Settings(_env_file=None)

    assert "app_version" not in Settings.model_fields
    assert not hasattr(config, "app_version")
