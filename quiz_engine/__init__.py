"""Quiz session engine: shuffling, answers, sessions, timer and scoring."""
from quiz_engine.bookmarks import BookmarkStore
from quiz_engine.errors import (
    ConfirmationRequired,
    EmptyBookmarkSet,
    InvalidJump,
    InvalidTransition,
    LoadFailure,
    QuizError,
    StorageFailure,
)
from quiz_engine.models import (
    ExamResult,
    Image,
    Mode,
    Option,
    Question,
    QuestionResult,
    Screen,
    ShuffledOption,
)
from quiz_engine.session import SessionController, SessionState
from quiz_engine.storage import KeyValueStorage, MemoryStorage
from quiz_engine.store import HttpQuestionStore, QuestionStore, StaticQuestionStore

__all__ = [
    "BookmarkStore",
    "ConfirmationRequired",
    "EmptyBookmarkSet",
    "ExamResult",
    "HttpQuestionStore",
    "Image",
    "InvalidJump",
    "InvalidTransition",
    "KeyValueStorage",
    "LoadFailure",
    "MemoryStorage",
    "Mode",
    "Option",
    "Question",
    "QuestionResult",
    "QuestionStore",
    "QuizError",
    "Screen",
    "SessionController",
    "SessionState",
    "ShuffledOption",
    "StaticQuestionStore",
    "StorageFailure",
]
