"""Exceptions raised by the conversation core."""

from __future__ import annotations

from typing import Any


class ConversationError(Exception):
    """
    Base exception for conversation errors.

    Attributes:
        message: Error description
        recoverable: Whether the session can continue in a consistent state
        context: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        recoverable: bool = True,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.recoverable = recoverable
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context,
            "type": self.__class__.__name__,
        }


class PersistenceError(ConversationError):
    """Durable slot read, write or serialization failure."""

    def __init__(
        self,
        operation: str,
        message: str,
        original_error: Exception | None = None,
    ):
        self.operation = operation
        self.original_error = original_error
        super().__init__(
            f"Failed to {operation} conversations: {message}",
            context={"operation": operation},
        )


class NotFoundError(ConversationError):
    """Reference to a conversation id that is not in the collection."""

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__(
            f"Conversation not found: {conversation_id}",
            context={"conversation_id": conversation_id},
        )


class EmptyInputError(ConversationError):
    """Blank message submission."""

    def __init__(self) -> None:
        super().__init__("Message is empty")


class NoCurrentConversationError(ConversationError):
    """No conversation is current; the collection invariant was broken."""

    def __init__(self) -> None:
        super().__init__("No current conversation")
