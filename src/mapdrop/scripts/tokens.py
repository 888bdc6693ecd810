# src/mapdrop/scripts/tokens.py
"""Mint development access tokens.

Identity lives outside this service; for local work this script can create a
bare user row and print a bearer token for it.
"""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from mapdrop.core.security import create_access_token
from mapdrop.db.session import SessionLocal
from mapdrop.models import User


def create_user(db: Session, name: str, nickname: str | None = None, bio: str | None = None) -> User:
    """Insert a user row and return it."""
    user = User(name=name, nickname=nickname, bio=bio)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def issue_token(db: Session, user_id: int) -> str:
    """Return a bearer token for an existing user.

    Raises:
        LookupError: If the user does not exist.
    """
    if db.get(User, user_id) is None:
        raise LookupError(f"user {user_id} does not exist")
    return create_access_token(user_id)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a bearer token for a MapDrop user")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user-id", type=int, help="Existing user id")
    target.add_argument("--create", metavar="NAME", help="Create a user with this name first")
    parser.add_argument("--nickname", default=None)
    parser.add_argument("--bio", default=None)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user_id = args.user_id
        if args.create:
            user_id = create_user(db, args.create, args.nickname, args.bio).id
            print(f"created user {user_id}", file=sys.stderr)
        print(issue_token(db, user_id))
    except LookupError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
