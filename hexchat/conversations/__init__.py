"""Conversation state for chat sessions: ids, titles, errors and the store."""

from .errors import (
    ConversationError,
    EmptyInputError,
    NoCurrentConversationError,
    NotFoundError,
    PersistenceError,
)
from .ids import generate_id
from .store import ConversationStore
from .titles import derive_title

__all__ = [
    "ConversationError",
    "ConversationStore",
    "EmptyInputError",
    "NoCurrentConversationError",
    "NotFoundError",
    "PersistenceError",
    "derive_title",
    "generate_id",
]
