"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mapdrop.core.clock import Clock, get_clock
from mapdrop.core.security import decode_user_id
from mapdrop.db.session import get_db
from mapdrop.models import User
from mapdrop.services import FollowService, MessageLifecycleService, ProfileService

# HTTP Bearer schemes; the optional one lets anonymous callers through.
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
ClockDep = Annotated[Clock, Depends(get_clock)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the JWT bearer token.

    Raises:
        HTTPException: If the token is invalid or the user does not exist.
    """
    user_id = decode_user_id(credentials.credentials)
    if user_id is None:
        raise _credentials_error()
    user = db.get(User, user_id)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)],
    db: SessionDep,
) -> User | None:
    """Like :func:`get_current_user` but returns None when no token is sent.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return get_current_user(credentials, db)


def get_message_service(db: SessionDep, clock: ClockDep) -> MessageLifecycleService:
    return MessageLifecycleService(db, clock)


def get_follow_service(db: SessionDep, clock: ClockDep) -> FollowService:
    return FollowService(db, clock)


def get_profile_service(db: SessionDep, clock: ClockDep) -> ProfileService:
    return ProfileService(db, clock)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
MessageServiceDep = Annotated[MessageLifecycleService, Depends(get_message_service)]
FollowServiceDep = Annotated[FollowService, Depends(get_follow_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
