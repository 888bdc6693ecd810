"""Database engine and request sessions."""

from .session import SessionLocal, get_db

__all__ = ["get_db", "SessionLocal"]
