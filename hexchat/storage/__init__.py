"""Durable storage for the conversation collection."""

from .repository import DEFAULT_SLOT_KEY, ConversationRepository
from .slots import BaseSlot, FileSlot, MemorySlot

__all__ = [
    "BaseSlot",
    "ConversationRepository",
    "DEFAULT_SLOT_KEY",
    "FileSlot",
    "MemorySlot",
]
