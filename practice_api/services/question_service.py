"""Service layer for the question bank (cache file + source)."""
import logging
from pathlib import Path
from typing import Callable

from quiz_engine.errors import LoadFailure
from quiz_engine.models import Question
from quiz_engine.records import parse_question_bank, question_to_payload

from practice_api.utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)

QuestionSource = Callable[[], object]


def json_file_source(path: Path) -> QuestionSource:
    """Source that reads an already-ingested question bank from a JSON file."""

    def _read() -> object:
        if not path.exists():
            raise LoadFailure(f"Question source not found: {path}")
        try:
            return read_json_file(path)
        except (OSError, ValueError) as exc:
            raise LoadFailure(f"Question source is unreadable: {exc}") from exc

    return _read


class QuestionBankService:
    """
    Serves the question bank from a cache file, regenerating it from the
    source when the cache is missing, unreadable or a refresh is forced.
    """

    def __init__(self, cache_path: Path, source: QuestionSource):
        self.cache_path = cache_path
        self.source = source

    def load(self, force: bool = False) -> tuple[list[Question], bool]:
        """Return (questions, served_from_cache)."""
        if not force and self.cache_path.exists():
            logger.info("Serving questions from cache...")
            try:
                return parse_question_bank(read_json_file(self.cache_path)), True
            except (OSError, ValueError, LoadFailure) as exc:
                logger.error("Error reading cache file, falling back to source: %s", exc)

        logger.info("Generating questions from source...")
        questions = parse_question_bank(self.source())

        try:
            write_json_file(self.cache_path, [question_to_payload(q) for q in questions])
            logger.info("Questions cached to %s", self.cache_path.name)
        except OSError as exc:
            logger.error("Error writing cache file: %s", exc)

        return questions, False


class LocalQuestionStore:
    """QuestionStore over an in-process QuestionBankService."""

    def __init__(self, service: QuestionBankService):
        self.service = service

    def get_all(self) -> list[Question]:
        questions, _ = self.service.load()
        return questions

    def refresh(self) -> list[Question]:
        questions, _ = self.service.load(force=True)
        return questions
