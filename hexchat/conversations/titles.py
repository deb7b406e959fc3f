"""Display titles derived from a conversation's first message."""

from __future__ import annotations

from hexchat.models.conversation import DEFAULT_TITLE

MAX_TITLE_LENGTH = 40
ELLIPSIS = "..."


def derive_title(first_message_text: str) -> str:
    """
    Build a sidebar title from the first user message.

    The text is trimmed; anything longer than ``MAX_TITLE_LENGTH`` characters
    is cut and marked with an ellipsis. Blank text yields ``DEFAULT_TITLE``.
    """
    title = first_message_text.strip()
    if len(title) > MAX_TITLE_LENGTH:
        title = title[:MAX_TITLE_LENGTH] + ELLIPSIS
    return title or DEFAULT_TITLE
