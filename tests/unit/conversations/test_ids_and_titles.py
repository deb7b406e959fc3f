"""Unit tests for id generation and title derivation."""

import re

from hexchat.conversations import derive_title, generate_id
from hexchat.conversations.titles import ELLIPSIS, MAX_TITLE_LENGTH


class TestGenerateId:
    """Test conversation id generation."""

    def test_id_format(self):
        """Ids carry a millisecond timestamp and a base36 suffix."""
        assert re.fullmatch(r"chat_\d{13,}_[0-9a-z]{9}", generate_id())

    def test_ids_are_unique(self):
        """A burst of ids in the same millisecond never collides."""
        ids = [generate_id() for _ in range(2000)]
        assert len(set(ids)) == len(ids)


class TestDeriveTitle:
    """Test display title derivation."""

    def test_empty_text_uses_default(self):
        assert derive_title("") == "New Chat"

    def test_whitespace_only_uses_default(self):
        assert derive_title("   \n\t ") == "New Chat"

    def test_text_is_trimmed(self):
        assert derive_title("  hi  ") == "hi"

    def test_long_text_is_truncated_with_ellipsis(self):
        text = "abcdefghij" * 5
        assert len(text) == 50

        title = derive_title(text)

        assert title == text[:40] + "..."
        assert title.endswith(ELLIPSIS)

    def test_exact_limit_is_not_truncated(self):
        text = "x" * MAX_TITLE_LENGTH
        assert derive_title(text) == text

    def test_truncation_happens_after_trimming(self):
        text = "   " + "y" * 41 + "   "
        assert derive_title(text) == "y" * 40 + "..."
