"""
Base Reply Generator

Abstract interface for anything that can answer a user message.
The bundled echo generator stands in for a real assistant backend; a network
client would implement the same method.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseReplyGenerator(ABC):
    """
    Abstract base class for reply generators.

    Attributes:
        generator_name: Unique identifier for this generator
    """

    def __init__(self, generator_name: str):
        self.generator_name = generator_name
        logger.debug(
            f"Initialized {generator_name} reply generator",
            extra={"generator": generator_name},
        )

    @abstractmethod
    async def generate(self, conversation_id: str, user_text: str) -> str:
        """
        Produce the assistant reply for a user message.

        Args:
            conversation_id: Conversation the message belongs to
            user_text: The user's message as submitted

        Returns:
            Assistant reply text
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(generator={self.generator_name})"
