"""Persistent set of bookmarked question ids."""
from __future__ import annotations

import json
import logging

from quiz_engine.errors import StorageFailure
from quiz_engine.models import Question
from quiz_engine.storage import BOOKMARKS_KEY, KeyValueStorage

log = logging.getLogger(__name__)


class BookmarkStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self._ids: set[int] = self._load()

    def _load(self) -> set[int]:
        try:
            raw = self.storage.get(BOOKMARKS_KEY)
        except StorageFailure as exc:
            log.error("Failed to load bookmarks: %s", exc)
            return set()
        if raw is None:
            return set()
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("Ignoring corrupt bookmarks payload")
            return set()
        if not isinstance(data, list):
            log.warning("Ignoring bookmarks payload of type %s", type(data).__name__)
            return set()
        return {item for item in data if isinstance(item, int) and not isinstance(item, bool)}

    def _save(self) -> None:
        try:
            self.storage.set(BOOKMARKS_KEY, json.dumps(sorted(self._ids)))
        except StorageFailure as exc:
            log.error("Failed to save bookmarks, keeping them in memory: %s", exc)

    def toggle(self, question_id: int) -> bool:
        """Add or remove a bookmark. Returns the new membership."""
        if question_id in self._ids:
            self._ids.discard(question_id)
            bookmarked = False
        else:
            self._ids.add(question_id)
            bookmarked = True
        self._save()
        return bookmarked

    def is_bookmarked(self, question_id: int) -> bool:
        return question_id in self._ids

    @property
    def ids(self) -> set[int]:
        return set(self._ids)

    def filter(self, questions: list[Question]) -> list[Question]:
        return [question for question in questions if question.id in self._ids]
