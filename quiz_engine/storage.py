"""Durable key/value storage used for bookmarks and the practice position."""
from __future__ import annotations

from typing import Protocol

BOOKMARKS_KEY = "bookmarks"
PRACTICE_INDEX_KEY = "practice_index"


class KeyValueStorage(Protocol):
    """String key/value store. Implementations raise StorageFailure on I/O errors."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
