"""Message endpoints: posting, reading and today's listings."""

from fastapi import APIRouter, Query, status

from mapdrop.schemas.message import (
    MessageCreate,
    MessageResponse,
    PostMessageResponse,
    ReadMessageResponse,
    RemainingResponse,
)

from ..dependencies import CurrentUserDep, MessageServiceDep
from ..responses import unwrap

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostMessageResponse)
async def post_message(
    payload: MessageCreate,
    current_user: CurrentUserDep,
    service: MessageServiceDep,
) -> PostMessageResponse:
    """Drop a new message; 429 once the daily limit is reached."""
    return unwrap(service.post_message(current_user.id, payload))


@router.post("/{message_id}/read", response_model=ReadMessageResponse)
async def read_message(
    message_id: int,
    current_user: CurrentUserDep,
    service: MessageServiceDep,
) -> ReadMessageResponse:
    """Mark a message as read by the current user.

    Reading your own message is refused with 422 and changes nothing.
    """
    return unwrap(service.read_message(current_user.id, message_id))


@router.get("", response_model=list[MessageResponse])
async def list_today(service: MessageServiceDep) -> list[MessageResponse]:
    """List every message posted today."""
    return unwrap(service.today_messages())


@router.get("/top/today", response_model=list[MessageResponse])
async def top_today(
    service: MessageServiceDep,
    limit: int = Query(10, ge=1, le=50, description="Maximum number of messages to return"),
) -> list[MessageResponse]:
    """List today's most-read messages."""
    return unwrap(service.top_messages_today(limit))


@router.get("/remaining", response_model=RemainingResponse)
async def remaining(current_user: CurrentUserDep, service: MessageServiceDep) -> RemainingResponse:
    """How many more messages the current user may post today."""
    return unwrap(service.remaining_for(current_user.id))


@router.get("/my/today", response_model=list[MessageResponse])
async def my_messages_today(
    current_user: CurrentUserDep,
    service: MessageServiceDep,
) -> list[MessageResponse]:
    """The current user's messages from today, newest first."""
    return unwrap(service.my_messages_today(current_user.id))
