"""
Conversation Store

In-memory conversation collection plus the current-conversation pointer.
Every mutating operation persists the full collection afterwards; the
pointer itself is session-local and is not persisted.

Invariants:
- conversation ids are unique
- when the collection is non-empty exactly one conversation is current
- new conversations go to the front and become current
- messages are only ever appended
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from hexchat.conversations.errors import (
    EmptyInputError,
    NoCurrentConversationError,
    NotFoundError,
)
from hexchat.conversations.ids import generate_id
from hexchat.conversations.titles import derive_title
from hexchat.models.conversation import Conversation, ConversationSummary, Message

if TYPE_CHECKING:
    from hexchat.replies.simulator import ReplySimulator
    from hexchat.storage.repository import ConversationRepository

logger = logging.getLogger(__name__)


class ConversationStore:
    """
    Owns the conversation collection for one session.

    Build it with ``ConversationStore.open(repository)`` at session start and
    hand the instance to whatever renders it.
    """

    def __init__(
        self,
        repository: ConversationRepository,
        reply_simulator: ReplySimulator | None = None,
        conversations: list[Conversation] | None = None,
    ) -> None:
        self._repository = repository
        self._replies = reply_simulator
        self._conversations: list[Conversation] = list(conversations or [])
        self._current_id: str | None = (
            self._conversations[0].id if self._conversations else None
        )
        self._pending: dict[str, set[asyncio.Task[None]]] = {}

    @classmethod
    def open(
        cls,
        repository: ConversationRepository,
        reply_simulator: ReplySimulator | None = None,
    ) -> ConversationStore:
        """Load the persisted collection; the first conversation becomes current."""
        store = cls(repository, reply_simulator, conversations=repository.load())
        if not store._conversations:
            store.create_conversation()
        logger.info(
            "Conversation store opened",
            extra={
                "conversation_count": len(store._conversations),
                "current_id": store._current_id,
            },
        )
        return store

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def current_id(self) -> str | None:
        return self._current_id

    # Accessors hand out deep copies; changes go through the mutation methods.

    @property
    def current_conversation(self) -> Conversation | None:
        conversation = self._find(self._current_id) if self._current_id else None
        return conversation.model_copy(deep=True) if conversation is not None else None

    @property
    def conversations(self) -> tuple[Conversation, ...]:
        return tuple(conversation.model_copy(deep=True) for conversation in self._conversations)

    def get_conversation(self, conversation_id: str) -> Conversation:
        conversation = self._find(conversation_id)
        if conversation is None:
            raise NotFoundError(conversation_id)
        return conversation.model_copy(deep=True)

    def get_messages(self, conversation_id: str | None = None) -> list[Message]:
        """Messages of the given conversation, or of the current one."""
        if conversation_id is None:
            return list(self._ensure_current().messages)
        conversation = self._find(conversation_id)
        if conversation is None:
            raise NotFoundError(conversation_id)
        return list(conversation.messages)

    def list_for_display(self) -> list[ConversationSummary]:
        """
        Sidebar projection in collection order.

        Empty conversations are hidden unless current, so the "New Chat"
        placeholder only shows while it is active.
        """
        return [
            ConversationSummary(
                id=conversation.id,
                title=conversation.title,
                message_count=len(conversation.messages),
                created_at=conversation.created_at,
                is_current=conversation.id == self._current_id,
            )
            for conversation in self._conversations
            if conversation.messages or conversation.id == self._current_id
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_conversation(self) -> str:
        conversation = Conversation(id=self._new_id())
        self._conversations.insert(0, conversation)
        self._current_id = conversation.id
        self._persist()
        logger.debug("Created conversation", extra={"conversation_id": conversation.id})
        return conversation.id

    def switch_to(self, conversation_id: str) -> None:
        if self._find(conversation_id) is None:
            raise NotFoundError(conversation_id)
        self._current_id = conversation_id

    def delete_conversation(self, conversation_id: str) -> None:
        conversation = self._find(conversation_id)
        if conversation is None:
            return

        self._cancel_pending(conversation_id)
        self._conversations.remove(conversation)
        logger.debug("Deleted conversation", extra={"conversation_id": conversation_id})

        if self._current_id == conversation_id:
            if self._conversations:
                self._current_id = self._conversations[0].id
            else:
                # create_conversation persists
                self.create_conversation()
                return
        self._persist()

    def append_user_message(self, text: str) -> Message:
        """
        Append a user turn to the current conversation and request a reply.

        The first message of a conversation also sets its title. The reply is
        scheduled on the running event loop and lands later through
        ``append_assistant_message``; this method returns immediately.

        Raises:
            EmptyInputError: If ``text`` is blank
            RuntimeError: If a reply simulator is attached and no event loop
                is running; nothing is stored in that case
        """
        if not text.strip():
            raise EmptyInputError()
        if self._replies is not None:
            asyncio.get_running_loop()

        conversation = self._ensure_current()
        if conversation.is_empty:
            conversation.title = derive_title(text)
        message = conversation.append("user", text)
        self._persist()

        if self._replies is not None:
            self._track(
                conversation.id,
                self._replies.request_reply(conversation.id, text, self.append_assistant_message),
            )
        return message

    def append_assistant_message(self, conversation_id: str, text: str) -> None:
        conversation = self._find(conversation_id)
        if conversation is None:
            logger.debug(
                "Dropped reply for deleted conversation",
                extra={"conversation_id": conversation_id},
            )
            return
        conversation.append("assistant", text)
        self._persist()

    def clear_all(self) -> None:
        for conversation_id in list(self._pending):
            self._cancel_pending(conversation_id)
        self._conversations.clear()
        self._current_id = None
        self._repository.clear()
        self.create_conversation()
        logger.info("Cleared all conversations")

    # ------------------------------------------------------------------
    # Pending replies
    # ------------------------------------------------------------------

    def pending_replies(self, conversation_id: str | None = None) -> int:
        if conversation_id is not None:
            return len(self._pending.get(conversation_id, ()))
        return sum(len(tasks) for tasks in self._pending.values())

    async def wait_for_replies(self) -> None:
        """Wait until every scheduled reply has landed or been cancelled."""
        while True:
            tasks = [task for tasks in self._pending.values() for task in tasks if not task.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def _track(self, conversation_id: str, task: asyncio.Task[None]) -> None:
        self._pending.setdefault(conversation_id, set()).add(task)

        def _forget(done: asyncio.Task[None]) -> None:
            tasks = self._pending.get(conversation_id)
            if tasks is None:
                return
            tasks.discard(done)
            if not tasks:
                del self._pending[conversation_id]

        task.add_done_callback(_forget)

    def _cancel_pending(self, conversation_id: str) -> None:
        tasks = self._pending.pop(conversation_id, set())
        for task in tasks:
            task.cancel()
        if tasks:
            logger.debug(
                "Cancelled pending replies",
                extra={"conversation_id": conversation_id, "count": len(tasks)},
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, conversation_id: str) -> Conversation | None:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def _new_id(self) -> str:
        conversation_id = generate_id()
        while self._find(conversation_id) is not None:
            conversation_id = generate_id()
        return conversation_id

    def _require_current(self) -> Conversation:
        conversation = self._find(self._current_id) if self._current_id else None
        if conversation is None:
            raise NoCurrentConversationError()
        return conversation

    def _ensure_current(self) -> Conversation:
        try:
            return self._require_current()
        except NoCurrentConversationError:
            logger.warning(
                "No current conversation; starting a new one",
                extra={"stale_current_id": self._current_id},
            )
            self.create_conversation()
            return self._require_current()

    def _persist(self) -> None:
        if not self._repository.save(self._conversations):
            logger.warning(
                "Continuing with in-memory conversations after failed save",
                extra={"conversation_count": len(self._conversations)},
            )
