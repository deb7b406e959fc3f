"""
Reply Simulator

Schedules an assistant reply on the running event loop after an artificial
delay. Each request becomes an ``asyncio.Task`` that calls back exactly once
unless it is cancelled first.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from hexchat.config import ReplySettings
from hexchat.replies.base import BaseReplyGenerator
from hexchat.replies.echo import EchoReplyGenerator

logger = logging.getLogger(__name__)

ReplyCallback = Callable[[str, str], None]

DEFAULT_DELAY_SECONDS = 2.0


class ReplySimulator:
    """
    Fire-and-forget reply scheduling.

    Usage:
        simulator = ReplySimulator(delay_seconds=0.5)
        task = simulator.request_reply("chat_1", "hi", store.append_assistant_message)
        task.cancel()  # drop the reply before it lands
    """

    def __init__(
        self,
        generator: BaseReplyGenerator | None = None,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")
        self.generator = generator or EchoReplyGenerator()
        self.delay_seconds = delay_seconds

    @classmethod
    def from_settings(cls, settings: ReplySettings) -> ReplySimulator:
        return cls(
            generator=EchoReplyGenerator(assistant_name=settings.assistant_name),
            delay_seconds=settings.delay_seconds,
        )

    def request_reply(
        self,
        conversation_id: str,
        user_text: str,
        on_reply: ReplyCallback,
    ) -> asyncio.Task[None]:
        """
        Schedule a reply for ``user_text``.

        Must be called while an event loop is running. Returns the task
        handle; cancelling it guarantees ``on_reply`` is never called.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._deliver(conversation_id, user_text, on_reply),
            name=f"reply:{conversation_id}",
        )
        logger.debug(
            "Scheduled simulated reply",
            extra={"conversation_id": conversation_id, "delay_seconds": self.delay_seconds},
        )
        return task

    async def _deliver(self, conversation_id: str, user_text: str, on_reply: ReplyCallback) -> None:
        await asyncio.sleep(self.delay_seconds)
        try:
            reply = await self.generator.generate(conversation_id, user_text)
        except Exception:
            logger.exception(
                "Reply generator failed",
                extra={"conversation_id": conversation_id, "generator": repr(self.generator)},
            )
            return
        try:
            on_reply(conversation_id, reply)
        except Exception:
            logger.exception(
                "Reply callback failed",
                extra={"conversation_id": conversation_id},
            )
