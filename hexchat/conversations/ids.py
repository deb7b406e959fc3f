"""Conversation identifier generation."""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
_RANDOM_LENGTH = 9


def generate_id() -> str:
    """Return an opaque id of the form ``chat_<epoch-ms>_<random base36>``."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_RANDOM_LENGTH))
    return f"chat_{millis}_{suffix}"
