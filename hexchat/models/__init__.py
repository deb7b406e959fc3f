"""
HexChat Models Module

Pydantic models for type-safe conversation data.

Available Models:
    - Message: One user or assistant turn
    - Conversation: A chat thread with ordered messages
    - ConversationSummary: Sidebar projection of a conversation

Usage:
    from hexchat.models import Conversation, Message
"""

from hexchat.models.conversation import (
    DEFAULT_TITLE,
    Conversation,
    ConversationSummary,
    Message,
    Role,
    conversation_list_adapter,
)

__all__ = [
    "DEFAULT_TITLE",
    "Conversation",
    "ConversationSummary",
    "Message",
    "Role",
    "conversation_list_adapter",
]
