"""Utility script to prepare the configured database."""
from __future__ import annotations

import argparse
import os
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql
from sqlalchemy import create_engine

from mapdrop.core.settings import settings
from mapdrop.db.session import Base, enable_sqlite_savepoints


def normalize_to_psycopg(uri: str) -> str:
    """Return a Postgres URI suitable for psycopg.connect().

    Strips quotes and whitespace and converts SQLAlchemy schemes
    (``postgresql+psycopg``) to plain ``postgresql``.
    """
    uri = (uri or "").strip().strip("'\"")
    if not uri:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(uri)
    scheme = parts.scheme
    if scheme.startswith("postgresql+"):
        scheme = "postgresql"
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def ensure_postgres_database(db_url: str) -> None:
    """Create the target Postgres database through the maintenance database if missing."""
    parts = urlsplit(normalize_to_psycopg(db_url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, parts.fragment))

    if os.getenv("ENSURE_DB_DEBUG") == "1":
        print(f"[ensure_db] admin_url={admin_url!r}, target_db={target_db!r}")

    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
            print(f"[ensure_db] created database {target_db}")
        else:
            print(f"[ensure_db] database {target_db} already exists")


def create_schema(db_url: str, *, drop_first: bool = False) -> None:
    """Create (optionally after dropping) every MapDrop table."""
    engine = create_engine(db_url)
    if db_url.startswith("sqlite"):
        enable_sqlite_savepoints(engine)
    try:
        if drop_first:
            Base.metadata.drop_all(bind=engine)
            print("[ensure_db] dropped all tables")
        Base.metadata.create_all(bind=engine)
        print("[ensure_db] tables are in place")
    finally:
        engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure the configured database and tables exist")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args()

    db_url = args.url or settings.effective_database_url
    try:
        if db_url.startswith("postgresql"):
            ensure_postgres_database(db_url)
        create_schema(db_url, drop_first=args.drop_tables)
    except Exception as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
