"""Uniform result shape returned by the user-facing services."""

from __future__ import annotations

import enum
import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

_F = TypeVar("_F", bound=Callable[..., "ServiceResult"])


class ResultStatus(str, enum.Enum):
    """Outcome classifier the transport layer maps to protocol codes."""

    OK = "ok"
    CREATED = "created"
    REJECTED = "rejected"
    INVALID = "invalid"
    NOT_AUTHORIZED = "not_authorized"
    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    INTERNAL_ERROR = "internal_error"


HTTP_STATUS_BY_RESULT: dict[ResultStatus, int] = {
    ResultStatus.OK: 200,
    ResultStatus.CREATED: 201,
    ResultStatus.REJECTED: 422,
    ResultStatus.INVALID: 422,
    ResultStatus.NOT_AUTHORIZED: 403,
    ResultStatus.NOT_FOUND: 404,
    ResultStatus.QUOTA_EXCEEDED: 429,
    ResultStatus.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class ServiceResult:
    """Success flag, optional reason, optional payload and a status classifier."""

    success: bool
    status: ResultStatus
    message: str | None = None
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> ServiceResult:
        return cls(success=True, status=ResultStatus.OK, message=message, data=data)

    @classmethod
    def created(cls, data: Any = None, message: str | None = None) -> ServiceResult:
        return cls(success=True, status=ResultStatus.CREATED, message=message, data=data)

    @classmethod
    def failure(cls, status: ResultStatus, message: str, data: Any = None) -> ServiceResult:
        return cls(success=False, status=status, message=message, data=data)

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_RESULT[self.status]


def storage_guarded(action: str) -> Callable[[_F], _F]:
    """Turn storage failures inside a service method into an INTERNAL_ERROR result.

    The session is rolled back and the exception is logged with the call
    arguments; the caller only sees a generic message.
    """

    def decorator(func: _F) -> _F:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> ServiceResult:
            try:
                return func(self, *args, **kwargs)
            except SQLAlchemyError:
                self.session.rollback()
                logger.exception("Error %s (args=%r, kwargs=%r)", action, args, kwargs)
                return ServiceResult.failure(
                    ResultStatus.INTERNAL_ERROR,
                    f"An error occurred while {action}",
                )

        return wrapper  # type: ignore[return-value]

    return decorator
