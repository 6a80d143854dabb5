# src/mindwell/schemas/letter.py
"""Letter-related Pydantic schemas."""

from datetime import UTC, datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from mindwell.core.settings import settings


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class LetterCreate(BaseModel):
    """Schema for submitting a new letter."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(
        ...,
        min_length=1,
        max_length=settings.letter_max_length,
        description="Letter body",
    )
    username: str | None = Field(
        None,
        max_length=255,
        description="Display handle; replaced by the verified identity when a token is sent",
    )
    title: str | None = Field(None, max_length=100)
    mood: str | None = Field(None, max_length=50)


class ReplyCreate(BaseModel):
    """Schema for replying to a letter; accepts ``replyContent`` or ``content``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    reply_content: str | None = Field(
        None,
        validation_alias=AliasChoices("replyContent", "reply_content"),
    )
    content: str | None = None
    username: str = Field(..., min_length=1, max_length=255)

    @model_validator(mode="after")
    def _require_body(self) -> "ReplyCreate":
        text = self.reply_content or self.content
        if not text:
            raise ValueError("Reply content is required.")
        if len(text) > settings.reply_max_length:
            raise ValueError(
                f"Reply must be between 1 and {settings.reply_max_length} characters."
            )
        return self

    @property
    def text(self) -> str:
        return self.reply_content or self.content or ""


class LetterDelete(BaseModel):
    """Schema for deleting a letter; the username must match the author."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1, max_length=255)


class ReplyResponse(BaseModel):
    """A reply as returned by the API."""

    content: str
    username: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class LetterResponse(BaseModel):
    """Schema for letter information returned by the API."""

    id: str
    title: str
    content: str
    mood: str
    username: str
    likes: int
    replies: list[ReplyResponse]
    reply_count: int = Field(0, serialization_alias="replyCount")
    timestamp: datetime

    @model_validator(mode="before")
    @classmethod
    def _extract_orm_fields(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        data["replies"] = [
            reply if isinstance(reply, dict) else {
                "content": reply.content,
                "username": reply.username,
                "timestamp": reply.timestamp,
            }
            for reply in data.get("replies") or []
        ]
        data["reply_count"] = len(data["replies"])
        data["likes"] = data.get("likes") or 0
        return data

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    model_config = ConfigDict(from_attributes=True)


class LetterCreated(BaseModel):
    """Acknowledgement for a stored letter."""

    message: str
    id: str


class LikeResponse(BaseModel):
    """Acknowledgement for a like, carrying the new count."""

    message: str
    new_likes: int = Field(..., serialization_alias="newLikes")
