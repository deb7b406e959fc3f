"""
Durable key-value slots.

A slot stores one string value under a logical key. ``FileSlot`` keeps one
JSON file per key in a private directory; ``MemorySlot`` keeps values in a
dict for tests and throwaway sessions.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class BaseSlot(ABC):
    """Abstract key-value slot. Implementations may raise ``OSError``."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any prior value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""


class FileSlot(BaseSlot):
    """Slot backed by ``<directory>/<key>.json`` files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True, mode=0o700)

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()

    def write(self, key: str, value: str) -> None:
        self._ensure_dir()
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class MemorySlot(BaseSlot):
    """In-process slot; contents vanish with the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._values
