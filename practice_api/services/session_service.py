"""Service owning the single in-process session controller."""
import logging

from quiz_engine.bookmarks import BookmarkStore
from quiz_engine.errors import LoadFailure
from quiz_engine.session import SessionController

from practice_api.config import (
    EXAM_DURATION_MINUTES,
    EXAM_QUESTION_COUNT,
    PASS_MARK,
    QUESTIONS_CACHE_PATH,
    QUESTIONS_SOURCE_PATH,
)
from practice_api.services.question_service import (
    LocalQuestionStore,
    QuestionBankService,
    json_file_source,
)
from practice_api.services.storage_service import DatabaseStorage

logger = logging.getLogger(__name__)

question_bank = QuestionBankService(
    QUESTIONS_CACHE_PATH, json_file_source(QUESTIONS_SOURCE_PATH)
)

_controller: SessionController | None = None


def build_controller() -> SessionController:
    """Create a controller wired to the question bank and database storage."""
    storage = DatabaseStorage()
    return SessionController(
        LocalQuestionStore(question_bank),
        BookmarkStore(storage),
        storage,
        exam_question_count=EXAM_QUESTION_COUNT,
        exam_duration_seconds=EXAM_DURATION_MINUTES * 60,
        pass_mark=PASS_MARK,
    )


def start_controller() -> SessionController:
    """Build the controller and run the initial question bank load."""
    global _controller
    _controller = build_controller()
    try:
        count = _controller.load_questions()
        logger.info(f"Loaded {count} questions")
    except LoadFailure as e:
        logger.error(f"Initial question load failed: {e}")
    return _controller


def get_controller() -> SessionController:
    """Dependency returning the active controller."""
    if _controller is None:
        return start_controller()
    return _controller


def get_question_bank() -> QuestionBankService:
    """Dependency returning the question bank service."""
    return question_bank
