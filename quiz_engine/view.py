"""Pure view-model projections of controller state."""
from __future__ import annotations

from typing import Any

from quiz_engine.bookmarks import BookmarkStore
from quiz_engine.models import ExamResult, Mode, QuestionResult, Screen
from quiz_engine.scoring import PASS_MARK, filter_results
from quiz_engine.session import SessionController, SessionState
from quiz_engine.timer import format_clock

MODE_TITLES = {
    Mode.PRACTICE: "Practice Mode",
    Mode.BOOKMARKS: "Review Bookmarks",
    Mode.EXAM: "Exam",
}


def _option_classes(selected: bool, is_correct: bool, revealed: bool) -> list[str]:
    classes = ["selected"] if selected else []
    if revealed:
        if is_correct:
            classes.append("correct")
        elif selected:
            classes.append("incorrect")
    return classes


def question_view(state: SessionState, bookmarks: BookmarkStore) -> dict[str, Any]:
    question = state.current_question
    index = state.current_index
    total = len(state.questions)
    is_exam = state.mode == Mode.EXAM
    checked = not is_exam and state.answers.is_checked(question.id)
    selected = state.answers.selected(question.id)

    options = []
    for shuffled in state.shuffled_options():
        is_selected = shuffled.original_index in selected
        options.append(
            {
                "originalIndex": shuffled.original_index,
                "text": shuffled.option.text,
                "selected": is_selected,
                "classes": _option_classes(is_selected, shuffled.option.is_correct, checked),
            }
        )

    view: dict[str, Any] = {
        "mode": state.mode.value,
        "title": MODE_TITLES[state.mode],
        "progress": {"questionId": question.id, "position": index + 1, "total": total},
        "progressText": f"#{question.id} ({index + 1} / {total})",
        "questionId": question.id,
        "question": question.question,
        "images": [{"src": image.src, "alt": image.alt} for image in question.images],
        "meta": f"Select {question.expected_answers} option(s).",
        "expectedAnswers": question.expected_answers,
        "options": options,
        "selected": selected,
        "bookmarked": bookmarks.is_bookmarked(question.id),
        "canPrev": index > 0,
        "canNext": index < total - 1,
        "checked": checked,
        "showCheck": not is_exam and not checked,
        "showSubmit": is_exam and index == total - 1,
    }
    if is_exam:
        view["remainingSeconds"] = state.remaining_seconds
        view["clock"] = format_clock(state.remaining_seconds or 0)
    return view


def _review_entry(result: QuestionResult) -> dict[str, Any]:
    options = result.question.options
    return {
        "position": result.position,
        "questionId": result.question_id,
        "question": result.question.question,
        "isCorrect": result.is_correct,
        "status": "Correct" if result.is_correct else "Incorrect",
        "yourAnswers": [
            {
                "originalIndex": index,
                "text": options[index].text,
                "isCorrect": options[index].is_correct,
            }
            for index in result.selected
            if 0 <= index < len(options)
        ],
        "correctAnswers": [
            {"originalIndex": index, "text": options[index].text}
            for index in result.correct_indices
        ],
    }


def result_view(result: ExamResult, only_failed: bool = False, pass_mark: int = PASS_MARK) -> dict[str, Any]:
    entries = [_review_entry(item) for item in filter_results(result, only_failed)]
    if result.passed:
        message = "PASSED!"
    else:
        message = f"failed. (Pass mark is {pass_mark}%)"
    view: dict[str, Any] = {
        "percentage": result.percentage,
        "correctCount": result.correct_count,
        "total": result.total,
        "passed": result.passed,
        "message": message,
        "timeTaken": format_clock(result.elapsed_seconds),
        "onlyFailed": only_failed,
        "filterLabel": "Show All Questions" if only_failed else "Show Failed Only",
        "questions": entries,
    }
    if not entries:
        view["emptyMessage"] = "No incorrect answers! You got everything right!"
    return view


def controller_view(controller: SessionController, only_failed: bool = False) -> dict[str, Any]:
    view: dict[str, Any] = {"screen": controller.screen.value}
    if controller.screen == Screen.LOADING:
        view["error"] = controller.load_error
    elif controller.screen == Screen.MENU:
        view["questionCount"] = len(controller.questions)
        view["bookmarkCount"] = len(controller.bookmarks.ids)
    elif controller.screen == Screen.RESULT and controller.result is not None:
        view["result"] = result_view(controller.result, only_failed, controller.pass_mark)
    elif controller.session is not None:
        view["question"] = question_view(controller.session, controller.bookmarks)
    return view
