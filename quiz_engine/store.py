"""Question store interface and implementations."""
from __future__ import annotations

import logging
from typing import Protocol

import requests

from quiz_engine.errors import LoadFailure
from quiz_engine.models import Question
from quiz_engine.records import parse_question_bank

log = logging.getLogger(__name__)


class QuestionStore(Protocol):
    def get_all(self) -> list[Question]:
        ...

    def refresh(self) -> list[Question]:
        ...


class StaticQuestionStore:
    """Store over a fixed in-memory list of questions."""

    def __init__(self, questions: list[Question]):
        self._questions = list(questions)

    def get_all(self) -> list[Question]:
        if not self._questions:
            raise LoadFailure("Invalid or empty questions data")
        return list(self._questions)

    def refresh(self) -> list[Question]:
        return self.get_all()


class HttpQuestionStore:
    """Fetches the question bank from a running practice server."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _fetch(self, force: bool) -> list[Question]:
        url = f"{self.base_url}/api/questions"
        params = {"force": "true"} if force else None
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            log.error("Failed to load questions from %s: %s", url, exc)
            raise LoadFailure(f"Error loading questions: {exc}") from exc
        except ValueError as exc:
            log.error("Question bank at %s is not valid JSON: %s", url, exc)
            raise LoadFailure("Error loading questions: invalid JSON") from exc
        return parse_question_bank(payload)

    def get_all(self) -> list[Question]:
        return self._fetch(force=False)

    def refresh(self) -> list[Question]:
        return self._fetch(force=True)
