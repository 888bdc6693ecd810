"""Engine, session factory and declarative base for MapDrop."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from mapdrop.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Register every model on Base.metadata before create_all or Alembic autogenerate.
import mapdrop.models  # noqa: E402,F401


def enable_sqlite_savepoints(engine: Engine, *, immediate: bool = False) -> None:
    """Let SQLAlchemy own BEGIN on pysqlite so SAVEPOINTs behave.

    Read, follow and unlock inserts rely on SAVEPOINT rollbacks to resolve
    unique-constraint races. With ``immediate`` each transaction takes the
    write lock up front, so concurrent connections queue on the busy timeout
    instead of failing with a lock-upgrade deadlock.
    """
    begin = "BEGIN IMMEDIATE" if immediate else "BEGIN"

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:  # type: ignore[no-untyped-def]
        conn.exec_driver_sql(begin)


_is_sqlite = settings.effective_database_url.startswith("sqlite")

engine = create_engine(
    settings.effective_database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
if _is_sqlite:
    enable_sqlite_savepoints(engine, immediate=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; services commit or roll back themselves."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

