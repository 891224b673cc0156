"""Session controller: mode transitions, navigation and exam lifecycle."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from quiz_engine.answers import AnswerTracker
from quiz_engine.bookmarks import BookmarkStore
from quiz_engine.errors import (
    ConfirmationRequired,
    EmptyBookmarkSet,
    InvalidJump,
    InvalidTransition,
    LoadFailure,
    StorageFailure,
)
from quiz_engine.models import ExamResult, Mode, Question, Screen, ShuffledOption
from quiz_engine.scoring import PASS_MARK, score_exam
from quiz_engine.shuffler import OptionShuffler
from quiz_engine.storage import PRACTICE_INDEX_KEY, KeyValueStorage
from quiz_engine.store import QuestionStore
from quiz_engine.timer import ExamTimer

log = logging.getLogger(__name__)

EXAM_QUESTION_COUNT = 80
EXAM_DURATION_SECONDS = 60 * 60

TimerFactory = Callable[[int, Callable[[], None]], ExamTimer]

_MODE_SCREENS = {
    Mode.PRACTICE: Screen.PRACTICE,
    Mode.BOOKMARKS: Screen.BOOKMARKS,
    Mode.EXAM: Screen.EXAM,
}


@dataclass
class SessionState:
    """In-memory state of one practice, bookmark review or exam run."""

    mode: Mode
    questions: list[Question]
    current_index: int = 0
    answers: AnswerTracker = field(default_factory=AnswerTracker)
    shuffler: OptionShuffler = field(default_factory=OptionShuffler)
    timer: ExamTimer | None = None

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def remaining_seconds(self) -> int | None:
        if self.timer is None:
            return None
        return self.timer.remaining_seconds

    def shuffled_options(self, question: Question | None = None) -> list[ShuffledOption]:
        return self.shuffler.shuffle(question or self.current_question)

    def close(self) -> None:
        if self.timer is not None:
            self.timer.stop()


class SessionController:
    """
    Owns the question bank, the active session and the last exam result.

    All methods are expected to run on a single thread (the event loop that
    also fires timer ticks); none of them block.
    """

    def __init__(
        self,
        store: QuestionStore,
        bookmarks: BookmarkStore,
        storage: KeyValueStorage,
        rng: random.Random | None = None,
        timer_factory: TimerFactory | None = None,
        exam_question_count: int = EXAM_QUESTION_COUNT,
        exam_duration_seconds: int = EXAM_DURATION_SECONDS,
        pass_mark: int = PASS_MARK,
    ):
        self.store = store
        self.bookmarks = bookmarks
        self.storage = storage
        self.rng = rng or random.Random()
        self.timer_factory = timer_factory or (
            lambda seconds, on_expire: ExamTimer(seconds, on_expire)
        )
        self.exam_question_count = exam_question_count
        self.exam_duration_seconds = exam_duration_seconds
        self.pass_mark = pass_mark

        self.questions: list[Question] = []
        self.load_error: str | None = None
        self.session: SessionState | None = None
        self.result: ExamResult | None = None
        self.screen = Screen.LOADING

    # Question bank

    def load_questions(self) -> int:
        """Initial fetch (and manual retry) of the question bank."""
        try:
            questions = self.store.get_all()
        except LoadFailure as exc:
            self.load_error = str(exc)
            self.screen = Screen.LOADING
            log.error("Failed to load questions: %s", exc)
            raise
        return self._set_questions(questions)

    def reload_questions(self, confirmed: bool = False) -> int:
        """Force regeneration of the question bank. Menu only."""
        self._require_screen(Screen.MENU)
        if not confirmed:
            raise ConfirmationRequired("This will force a re-parse of the question bank. Continue?")
        try:
            questions = self.store.refresh()
        except LoadFailure as exc:
            self.load_error = "Error reloading questions."
            self.screen = Screen.LOADING
            log.error("Failed to reload questions: %s", exc)
            raise
        count = self._set_questions(questions)
        log.info("Successfully loaded %s questions", count)
        return count

    def _set_questions(self, questions: list[Question]) -> int:
        if not questions:
            self.load_error = "Invalid or empty questions data"
            self.screen = Screen.LOADING
            raise LoadFailure(self.load_error)
        self.questions = list(questions)
        self.load_error = None
        self.screen = Screen.MENU
        return len(self.questions)

    # Mode transitions

    def enter_practice(self) -> SessionState:
        self._require_menu()
        start_index = self._saved_practice_index()
        return self._start_session(Mode.PRACTICE, list(self.questions), start_index)

    def enter_bookmarks(self) -> SessionState:
        self._require_menu()
        questions = self.bookmarks.filter(self.questions)
        if not questions:
            raise EmptyBookmarkSet("You haven't bookmarked any questions yet.")
        return self._start_session(Mode.BOOKMARKS, questions, 0)

    def enter_exam(self) -> SessionState:
        self._require_menu()
        count = min(self.exam_question_count, len(self.questions))
        questions = self.rng.sample(self.questions, count)
        # the timer must be running before the session is committed
        timer = self.timer_factory(self.exam_duration_seconds, self._on_time_up)
        timer.start()
        session = self._start_session(Mode.EXAM, questions, 0)
        session.timer = timer
        return session

    def _start_session(self, mode: Mode, questions: list[Question], index: int) -> SessionState:
        self._close_session()
        self.result = None
        self.session = SessionState(
            mode=mode,
            questions=questions,
            current_index=index,
            shuffler=OptionShuffler(self.rng),
        )
        self.screen = _MODE_SCREENS[mode]
        log.info("Started %s session with %s questions", mode.value, len(questions))
        return self.session

    def exit(self, confirmed: bool = False) -> None:
        if self.screen == Screen.EXAM and not confirmed:
            raise ConfirmationRequired(
                "Are you sure you want to exit the exam? All progress will be lost."
            )
        if self.screen == Screen.LOADING:
            raise InvalidTransition("Questions are not loaded")
        self._close_session()
        self.result = None
        self.screen = Screen.MENU

    def _close_session(self) -> None:
        if self.session is not None:
            self.session.close()
        self.session = None

    # Navigation

    def navigate(self, delta: int) -> int:
        session = self._require_session()
        new_index = session.current_index + delta
        if 0 <= new_index < len(session.questions):
            session.current_index = new_index
            if session.mode == Mode.PRACTICE:
                self._save_practice_index(new_index)
        return session.current_index

    def jump_to(self, number: int | str) -> int:
        session = self._require_session()
        total = len(session.questions)
        try:
            if isinstance(number, bool) or not isinstance(number, (int, str)):
                raise TypeError(type(number).__name__)
            value = int(number)
        except (TypeError, ValueError):
            raise InvalidJump(f"Please enter a number between 1 and {total}") from None
        if not 1 <= value <= total:
            raise InvalidJump(f"Please enter a number between 1 and {total}")
        session.current_index = value - 1
        return session.current_index

    def _saved_practice_index(self) -> int:
        try:
            raw = self.storage.get(PRACTICE_INDEX_KEY)
        except StorageFailure as exc:
            log.error("Failed to read saved practice position: %s", exc)
            return 0
        if raw is None:
            return 0
        try:
            index = int(raw)
        except ValueError:
            log.warning("Ignoring invalid saved practice position %r", raw)
            return 0
        if 0 <= index < len(self.questions):
            return index
        return 0

    def _save_practice_index(self, index: int) -> None:
        try:
            self.storage.set(PRACTICE_INDEX_KEY, str(index))
        except StorageFailure as exc:
            log.error("Failed to save practice position: %s", exc)

    # Answers

    def select(self, original_index: int) -> list[int]:
        session = self._require_session()
        question = session.current_question
        return session.answers.select(
            question.id,
            original_index,
            question.expected_answers,
            option_count=len(question.options),
        )

    def toggle_check(self) -> bool:
        session = self._require_session()
        if session.mode == Mode.EXAM:
            raise InvalidTransition("Answers cannot be checked during an exam")
        return session.answers.toggle_check(session.current_question.id)

    def toggle_bookmark(self, question_id: int | None = None) -> bool:
        if question_id is None:
            question_id = self._require_session().current_question.id
        return self.bookmarks.toggle(question_id)

    # Exam submission

    def submit(self, confirmed: bool = False) -> ExamResult:
        session = self._require_session()
        if session.mode != Mode.EXAM:
            raise InvalidTransition("Only exams can be submitted")
        if not confirmed:
            raise ConfirmationRequired(
                "Are you sure you want to submit the exam? "
                "You cannot change your answers after submission."
            )
        return self._finish_exam(session)

    def _on_time_up(self) -> None:
        session = self.session
        if session is None or session.mode != Mode.EXAM:
            return
        self._finish_exam(session)

    def _finish_exam(self, session: SessionState) -> ExamResult:
        session.close()
        elapsed = session.timer.elapsed_seconds if session.timer is not None else 0
        self.result = score_exam(
            session.questions,
            session.answers,
            pass_mark=self.pass_mark,
            elapsed_seconds=elapsed,
        )
        self.session = None
        self.screen = Screen.RESULT
        log.info(
            "Exam finished: %s/%s correct (%s%%)",
            self.result.correct_count,
            self.result.total,
            self.result.percentage,
        )
        return self.result

    # Keyboard shortcuts

    def handle_key(self, key: str, confirmed: bool = False) -> None:
        """Route a keyboard shortcut through the regular operations."""
        session = self.session
        if session is None:
            return
        in_practice = session.mode in (Mode.PRACTICE, Mode.BOOKMARKS)
        question = session.current_question

        if key in ("Enter", "Space", " "):
            if in_practice:
                if session.answers.has_selection(question.id) and not session.answers.is_checked(
                    question.id
                ):
                    self.toggle_check()
                    return
            elif session.current_index == len(session.questions) - 1:
                self.submit(confirmed)
                return
            self.navigate(1)
        elif key in ("Backspace", "Delete"):
            self.navigate(-1)
        elif key == "Alt" and in_practice:
            self.toggle_check()

    # Guards

    def _require_session(self) -> SessionState:
        if self.session is None:
            raise InvalidTransition("No active session")
        return self.session

    def _require_screen(self, screen: Screen) -> None:
        if self.screen != screen:
            raise InvalidTransition(f"Not available on the {self.screen.value} screen")

    def _require_menu(self) -> None:
        if self.screen == Screen.RESULT:
            self.exit()
        if self.screen == Screen.LOADING:
            raise LoadFailure(self.load_error or "Questions are not loaded")
        self._require_screen(Screen.MENU)
