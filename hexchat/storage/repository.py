"""
Conversation Repository

Serializes the whole conversation collection into a single durable slot.
Every failure is logged and recorded on ``last_error``; nothing is raised to
the caller so the in-memory session keeps running.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from hexchat.conversations.errors import PersistenceError
from hexchat.models.conversation import Conversation, conversation_list_adapter
from hexchat.storage.slots import BaseSlot

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "hexgpt_chats"


class ConversationRepository:
    """
    Load and save the conversation collection as one JSON value.

    Usage:
        repository = ConversationRepository(FileSlot("~/.hexchat"))
        conversations = repository.load()
        repository.save(conversations)
        repository.clear()
    """

    def __init__(self, slot: BaseSlot, key: str = DEFAULT_SLOT_KEY) -> None:
        self.slot = slot
        self.key = key
        self.last_error: PersistenceError | None = None

    def save(self, conversations: Sequence[Conversation]) -> bool:
        """
        Overwrite the slot with the full collection.

        Returns:
            True on success, False when the write failed (see ``last_error``).
        """
        try:
            payload = conversation_list_adapter.dump_json(
                list(conversations), by_alias=True, indent=2
            ).decode("utf-8")
            self.slot.write(self.key, payload)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            return self._fail("save", f"serialization failed: {exc}", exc)
        except OSError as exc:
            return self._fail("save", f"write failed: {exc}", exc)

        self.last_error = None
        logger.debug(
            "Saved conversations",
            extra={"slot_key": self.key, "conversation_count": len(conversations)},
        )
        return True

    def load(self) -> list[Conversation]:
        """
        Read the collection back.

        An absent slot is an empty collection. Unreadable, malformed or
        structurally incompatible data is treated as absent and recorded on
        ``last_error``.
        """
        self.last_error = None
        try:
            raw = self.slot.read(self.key)
        except (OSError, UnicodeDecodeError) as exc:
            self._fail("load", f"read failed: {exc}", exc)
            return []

        if raw is None:
            return []

        try:
            conversations = conversation_list_adapter.validate_json(raw)
        except ValidationError as exc:
            self._fail("load", f"stored data is malformed ({exc.error_count()} errors)", exc)
            return []

        ids = [conversation.id for conversation in conversations]
        if len(ids) != len(set(ids)):
            self._fail("load", "stored data contains duplicate conversation ids")
            return []

        logger.debug(
            "Loaded conversations",
            extra={"slot_key": self.key, "conversation_count": len(conversations)},
        )
        return conversations

    def clear(self) -> None:
        """Remove the slot entirely. Safe to call when it is already absent."""
        try:
            self.slot.remove(self.key)
        except OSError as exc:
            self._fail("clear", f"remove failed: {exc}", exc)
            return
        self.last_error = None

    def _fail(self, operation: str, message: str, exc: Exception | None = None) -> bool:
        error = PersistenceError(operation, message, original_error=exc)
        self.last_error = error
        logger.warning(str(error), extra={"slot_key": self.key, "operation": operation})
        return False
