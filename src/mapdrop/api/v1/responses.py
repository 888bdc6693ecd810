"""Translate service results into HTTP responses."""

from typing import Any

from fastapi import HTTPException

from mapdrop.services.results import ServiceResult


def unwrap(result: ServiceResult) -> Any:
    """Return the payload of a successful result or raise the matching HTTPException."""
    if result.success:
        return result.data
    raise HTTPException(
        status_code=result.http_status,
        detail=result.message or "Request failed",
    )
