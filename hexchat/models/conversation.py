"""
Conversation Models

Pydantic models for conversations, their messages and the sidebar
projection. The persisted field names (``createdAt``) are serialization
aliases; Python code uses snake_case.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_serializer,
    field_validator,
)

DEFAULT_TITLE = "New Chat"
Role = Literal["user", "assistant"]


def _to_millis(value: datetime) -> datetime:
    # stored timestamps carry milliseconds only
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class Message(BaseModel):
    """Single chat message in a conversation."""

    role: Role = Field(..., description="Message role: 'user' or 'assistant'")
    content: str = Field(..., description="Plain text message content")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"role": "user", "content": "Hello world"}},
    )


class Conversation(BaseModel):
    """One chat thread: identity, display title and ordered messages."""

    id: str = Field(..., min_length=1, frozen=True, description="Opaque unique id")
    title: str = Field(default=DEFAULT_TITLE, description="Display title")
    messages: list[Message] = Field(
        default_factory=list,
        description="Messages in conversation order (append-only)",
    )
    created_at: datetime = Field(
        default_factory=lambda: _to_millis(datetime.now(UTC)),
        alias="createdAt",
        frozen=True,
        description="Creation timestamp (UTC, millisecond precision)",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "chat_1735689600000_k3j9x0a2q",
                "title": "Hello world",
                "messages": [{"role": "user", "content": "Hello world"}],
                "createdAt": "2025-01-01T00:00:00.000Z",
            }
        },
    )

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return _to_millis(value.astimezone(UTC))

    @field_serializer("created_at", when_used="json")
    def serialize_created_at(self, value: datetime) -> str:
        """Same text a browser's ``Date.toISOString()`` produces."""
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self.messages.append(message)
        return message


class ConversationSummary(BaseModel):
    """Read-only sidebar entry for a conversation."""

    id: str = Field(..., description="Conversation id")
    title: str = Field(..., description="Display title")
    message_count: int = Field(..., ge=0, description="Number of messages")
    created_at: datetime = Field(..., description="Creation timestamp")
    is_current: bool = Field(default=False, description="Whether this is the active thread")

    model_config = ConfigDict(frozen=True)


conversation_list_adapter = TypeAdapter(list[Conversation])
