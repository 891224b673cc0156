from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Mode(str, enum.Enum):
    PRACTICE = "practice"
    BOOKMARKS = "bookmarks"
    EXAM = "exam"


class Screen(str, enum.Enum):
    LOADING = "loading"
    MENU = "menu"
    PRACTICE = "practice"
    BOOKMARKS = "bookmarks"
    EXAM = "exam"
    RESULT = "result"


@dataclass(frozen=True)
class Option:
    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class Image:
    src: str
    alt: str = ""


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    expected_answers: int
    options: tuple[Option, ...]
    images: tuple[Image, ...] = ()

    @property
    def correct_indices(self) -> list[int]:
        return [index for index, option in enumerate(self.options) if option.is_correct]


@dataclass(frozen=True)
class ShuffledOption:
    option: Option
    original_index: int


@dataclass(frozen=True)
class QuestionResult:
    position: int  # 1-based, within the exam
    question_id: int
    question: Question
    selected: tuple[int, ...]
    correct_indices: tuple[int, ...]
    is_correct: bool


@dataclass(frozen=True)
class ExamResult:
    percentage: int
    correct_count: int
    total: int
    passed: bool
    per_question: tuple[QuestionResult, ...] = field(default_factory=tuple)
    elapsed_seconds: int = 0
