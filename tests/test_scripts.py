"""Tests for the developer scripts."""

import pytest
from sqlalchemy import create_engine, inspect

from mapdrop.core.security import decode_user_id
from mapdrop.scripts import tokens
from mapdrop.scripts.ensure_db import create_schema, normalize_to_psycopg


def test_issue_token_for_existing_user(db_session, alice) -> None:
    assert decode_user_id(tokens.issue_token(db_session, alice.id)) == alice.id


def test_issue_token_for_missing_user(db_session) -> None:
    with pytest.raises(LookupError):
        tokens.issue_token(db_session, 123456)


def test_main_creates_user_and_prints_token(db_session, mocker, capsys) -> None:
    mocker.patch.object(tokens, "SessionLocal", return_value=db_session)
    mocker.patch.object(db_session, "close")

    assert tokens.main(["--create", "Dana", "--nickname", "dana"]) == 0

    out = capsys.readouterr()
    user_id = decode_user_id(out.out.strip())
    assert user_id is not None
    assert f"created user {user_id}" in out.err


def test_main_reports_missing_user(db_session, mocker, capsys) -> None:
    mocker.patch.object(tokens, "SessionLocal", return_value=db_session)
    mocker.patch.object(db_session, "close")

    assert tokens.main(["--user-id", "999999"]) == 1
    assert "does not exist" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("postgresql+psycopg2://u@h/db", "postgresql://u@h/db"),
        ("postgresql+psycopg://u@h/db", "postgresql://u@h/db"),
        ("postgresql://u@h/db", "postgresql://u@h/db"),
    ],
)
def test_normalize_to_psycopg(url, expected) -> None:
    assert normalize_to_psycopg(url) == expected


def test_create_schema_on_fresh_sqlite_file(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'fresh.db'}"

    create_schema(url)
    create_schema(url, drop_first=True)

    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"users", "messages", "message_reads", "follows", "unlocked_profiles"} <= tables
