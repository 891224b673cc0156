import random

import pytest

from quiz_engine.bookmarks import BookmarkStore
from quiz_engine.errors import (
    ConfirmationRequired,
    EmptyBookmarkSet,
    InvalidJump,
    InvalidTransition,
    LoadFailure,
    StorageFailure,
)
from quiz_engine.models import Mode, Option, Question, Screen
from quiz_engine.session import SessionController
from quiz_engine.storage import BOOKMARKS_KEY, PRACTICE_INDEX_KEY, MemoryStorage
from quiz_engine.store import StaticQuestionStore
from quiz_engine.timer import ExamTimer


class FakeHandle:
    def cancel(self) -> None:
        return None


def _fake_scheduler(delay, callback):
    return FakeHandle()


def _question(question_id: int, expected: int = 1) -> Question:
    return Question(
        id=question_id,
        question=f"Question {question_id}",
        expected_answers=expected,
        options=tuple(Option(f"opt {i}", i < expected) for i in range(4)),
    )


def _controller(
    count: int = 10,
    storage: MemoryStorage | None = None,
    seed: int = 0,
) -> SessionController:
    storage = storage or MemoryStorage()
    controller = SessionController(
        StaticQuestionStore([_question(i) for i in range(1, count + 1)]),
        BookmarkStore(storage),
        storage,
        rng=random.Random(seed),
        timer_factory=lambda seconds, on_expire: ExamTimer(
            seconds, on_expire, scheduler=_fake_scheduler
        ),
    )
    controller.load_questions()
    return controller


class FailingStore:
    def get_all(self):
        raise LoadFailure("HTTP error! status: 500")

    def refresh(self):
        raise LoadFailure("HTTP error! status: 500")


def test_load_failure_keeps_loading_screen() -> None:
    storage = MemoryStorage()
    controller = SessionController(FailingStore(), BookmarkStore(storage), storage)
    with pytest.raises(LoadFailure):
        controller.load_questions()
    assert controller.screen == Screen.LOADING
    assert "500" in controller.load_error
    with pytest.raises(LoadFailure):
        controller.enter_practice()


def test_enter_practice_uses_full_store_in_order() -> None:
    controller = _controller()
    session = controller.enter_practice()
    assert controller.screen == Screen.PRACTICE
    assert [q.id for q in session.questions] == list(range(1, 11))
    assert session.current_index == 0


def test_practice_resumes_saved_position() -> None:
    storage = MemoryStorage({PRACTICE_INDEX_KEY: "4"})
    session = _controller(storage=storage).enter_practice()
    assert session.current_index == 4


@pytest.mark.parametrize("saved", ["42", "-1", "abc"])
def test_practice_ignores_invalid_saved_position(saved: str) -> None:
    storage = MemoryStorage({PRACTICE_INDEX_KEY: saved})
    assert _controller(storage=storage).enter_practice().current_index == 0


def test_navigation_clamps_and_persists_in_practice() -> None:
    storage = MemoryStorage()
    controller = _controller(storage=storage)
    controller.enter_practice()

    assert controller.navigate(-1) == 0
    assert PRACTICE_INDEX_KEY not in storage.values

    controller.navigate(1)
    controller.navigate(1)
    assert storage.values[PRACTICE_INDEX_KEY] == "2"

    controller.jump_to(10)
    assert controller.navigate(1) == 9


def test_navigation_does_not_persist_in_bookmark_review() -> None:
    storage = MemoryStorage({BOOKMARKS_KEY: "[2, 4, 6]"})
    controller = _controller(storage=storage)
    session = controller.enter_bookmarks()
    assert [q.id for q in session.questions] == [2, 4, 6]

    controller.navigate(1)
    assert PRACTICE_INDEX_KEY not in storage.values


def test_empty_bookmarks_abort_mode_entry() -> None:
    controller = _controller()
    with pytest.raises(EmptyBookmarkSet):
        controller.enter_bookmarks()
    assert controller.screen == Screen.MENU
    assert controller.session is None


@pytest.mark.parametrize("number", [0, 11, "x", None, 2.9, True, "2.9"])
def test_invalid_jump_leaves_index_unchanged(number) -> None:
    controller = _controller()
    controller.enter_practice()
    controller.navigate(1)
    with pytest.raises(InvalidJump):
        controller.jump_to(number)
    assert controller.session.current_index == 1


def test_jump_accepts_numeric_input() -> None:
    controller = _controller()
    controller.enter_practice()
    assert controller.jump_to("7") == 6
    assert controller.jump_to(1) == 0


def test_select_locked_after_check() -> None:
    controller = _controller()
    controller.enter_practice()
    controller.select(2)
    assert controller.toggle_check() is True
    controller.select(1)
    assert controller.session.answers.selected(1) == [2]


def test_new_session_resets_answers_and_shuffle() -> None:
    controller = _controller()
    first = controller.enter_practice()
    controller.select(1)
    first_shuffler = first.shuffler
    controller.exit()

    second = controller.enter_practice()
    assert second.answers.selected(1) == []
    assert second.shuffler is not first_shuffler


def test_exam_samples_without_replacement() -> None:
    controller = _controller(count=100)
    session = controller.enter_exam()
    ids = [q.id for q in session.questions]
    assert len(ids) == 80
    assert len(set(ids)) == 80
    assert session.remaining_seconds == 3600


def test_exam_with_small_store_uses_all_questions() -> None:
    session = _controller(count=5).enter_exam()
    assert sorted(q.id for q in session.questions) == [1, 2, 3, 4, 5]


def test_exam_sample_is_deterministic_for_seed() -> None:
    first = [q.id for q in _controller(count=100, seed=3).enter_exam().questions]
    second = [q.id for q in _controller(count=100, seed=3).enter_exam().questions]
    assert first == second


def test_exam_exit_requires_confirmation() -> None:
    controller = _controller()
    controller.enter_exam()
    timer = controller.session.timer

    with pytest.raises(ConfirmationRequired):
        controller.exit()
    assert controller.screen == Screen.EXAM

    controller.exit(confirmed=True)
    assert controller.screen == Screen.MENU
    assert controller.session is None
    assert not timer.running


def test_check_is_not_available_in_exam() -> None:
    controller = _controller()
    controller.enter_exam()
    with pytest.raises(InvalidTransition):
        controller.toggle_check()


def test_manual_submit_requires_confirmation_and_scores() -> None:
    controller = _controller(count=4)
    session = controller.enter_exam()
    for question in session.questions:
        controller.select(0)
        controller.navigate(1)

    with pytest.raises(ConfirmationRequired):
        controller.submit()
    assert controller.screen == Screen.EXAM

    result = controller.submit(confirmed=True)
    assert controller.screen == Screen.RESULT
    assert controller.session is None
    assert result.correct_count == 4
    assert result.percentage == 100
    assert result.passed
    assert not session.timer.running


def test_timer_expiry_forces_single_submission() -> None:
    controller = _controller(count=3)
    session = controller.enter_exam()
    timer = session.timer
    for _ in range(3601):
        timer.tick()

    assert controller.screen == Screen.RESULT
    assert controller.result.total == 3
    assert controller.result.elapsed_seconds == 3600
    assert controller.result.correct_count == 0


def test_submit_outside_exam_is_rejected() -> None:
    controller = _controller()
    controller.enter_practice()
    with pytest.raises(InvalidTransition):
        controller.submit(confirmed=True)


def test_result_screen_returns_to_menu_on_new_mode() -> None:
    controller = _controller(count=3)
    controller.enter_exam()
    controller.submit(confirmed=True)
    controller.enter_practice()
    assert controller.screen == Screen.PRACTICE
    assert controller.result is None


def test_reload_requires_confirmation_from_menu() -> None:
    controller = _controller()
    with pytest.raises(ConfirmationRequired):
        controller.reload_questions()
    assert controller.reload_questions(confirmed=True) == 10

    controller.enter_practice()
    with pytest.raises(InvalidTransition):
        controller.reload_questions(confirmed=True)


def test_toggle_bookmark_defaults_to_current_question() -> None:
    controller = _controller()
    controller.enter_practice()
    controller.navigate(1)
    assert controller.toggle_bookmark() is True
    assert controller.bookmarks.ids == {2}
    assert controller.toggle_bookmark(5) is True
    assert controller.bookmarks.ids == {2, 5}


def test_storage_failure_does_not_break_navigation() -> None:
    class BrokenStorage(MemoryStorage):
        def get(self, key):
            raise StorageFailure("unavailable")

        def set(self, key, value):
            raise StorageFailure("unavailable")

    controller = _controller(storage=BrokenStorage())
    controller.enter_practice()
    assert controller.navigate(1) == 1
    assert controller.toggle_bookmark() is True


def test_enter_key_reveals_then_advances_in_practice() -> None:
    controller = _controller()
    controller.enter_practice()

    controller.handle_key("Enter")
    assert controller.session.current_index == 1

    controller.select(0)
    controller.handle_key("Enter")
    assert controller.session.answers.is_checked(2)
    assert controller.session.current_index == 1

    controller.handle_key("Space")
    assert controller.session.current_index == 2

    controller.handle_key("Backspace")
    assert controller.session.current_index == 1

    controller.handle_key("Alt")
    assert not controller.session.answers.is_checked(2)


def test_enter_key_on_last_exam_question_submits() -> None:
    controller = _controller(count=2)
    controller.enter_exam()
    controller.handle_key("Alt")
    controller.handle_key("Enter")
    assert controller.session.current_index == 1

    with pytest.raises(ConfirmationRequired):
        controller.handle_key("Enter")
    controller.handle_key("Enter", confirmed=True)
    assert controller.screen == Screen.RESULT


def test_keys_ignored_without_session() -> None:
    controller = _controller()
    controller.handle_key("Enter")
    assert controller.screen == Screen.MENU
    assert controller.session is None


def test_bookmark_mode_is_tracked_on_session() -> None:
    storage = MemoryStorage({BOOKMARKS_KEY: "[1]"})
    controller = _controller(storage=storage)
    assert controller.enter_bookmarks().mode == Mode.BOOKMARKS
    assert controller.screen == Screen.BOOKMARKS


def test_exam_without_event_loop_leaves_menu_intact() -> None:
    storage = MemoryStorage()
    controller = SessionController(
        StaticQuestionStore([_question(i) for i in range(1, 4)]),
        BookmarkStore(storage),
        storage,
    )
    controller.load_questions()

    with pytest.raises(RuntimeError):
        controller.enter_exam()
    assert controller.screen == Screen.MENU
    assert controller.session is None

    assert controller.enter_practice().mode == Mode.PRACTICE
