"""Message-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mapdrop.db.time import as_utc
from mapdrop.models.message import MAX_CONTENT_LENGTH, MAX_TAG_LENGTH, Message
from mapdrop.schemas.user import UserSummary


class MessageCreate(BaseModel):
    """Schema for dropping a new message on the map."""

    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    tag: str | None = Field(None, max_length=MAX_TAG_LENGTH)


class MessageResponse(BaseModel):
    """Schema for message information returned by the API."""

    id: int
    user_id: int
    content: str
    latitude: float
    longitude: float
    tag: str | None
    read_count: int
    created_at: datetime
    user: UserSummary

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def from_message(cls, message: Message) -> MessageResponse:
        return cls(
            id=message.id,
            user_id=message.user_id,
            content=message.content,
            latitude=message.latitude,
            longitude=message.longitude,
            tag=message.tag,
            read_count=message.read_count,
            created_at=message.created_at,
            user=UserSummary.from_user(message.author),
        )


class MapMessage(MessageResponse):
    """Message as shown on the map for a particular viewer."""

    user_has_read: bool
    is_top_message: bool


class PostMessageResponse(BaseModel):
    """Created message plus the author's remaining quota for today."""

    message: MessageResponse
    remaining: int


class ReadMessageResponse(BaseModel):
    """Counter and unlock state after a read."""

    profile_unlocked: bool
    new_read_count: int
    is_new_read: bool


class RemainingResponse(BaseModel):
    remaining: int
