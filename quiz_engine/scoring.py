"""Exam scoring."""
from __future__ import annotations

from typing import Iterable

from quiz_engine.answers import AnswerTracker
from quiz_engine.models import ExamResult, Question, QuestionResult

PASS_MARK = 85


def round_percentage(correct: int, total: int) -> int:
    """Round 100 * correct / total half-up, without floating point error."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def score_question(position: int, question: Question, selected: list[int]) -> QuestionResult:
    correct_indices = question.correct_indices
    return QuestionResult(
        position=position,
        question_id=question.id,
        question=question,
        selected=tuple(selected),
        correct_indices=tuple(correct_indices),
        # exact match, no partial credit
        is_correct=set(selected) == set(correct_indices),
    )


def score_exam(
    questions: list[Question],
    tracker: AnswerTracker,
    pass_mark: int = PASS_MARK,
    elapsed_seconds: int = 0,
) -> ExamResult:
    per_question = tuple(
        score_question(position, question, tracker.selected(question.id))
        for position, question in enumerate(questions, start=1)
    )
    correct_count = sum(1 for result in per_question if result.is_correct)
    percentage = round_percentage(correct_count, len(questions))
    return ExamResult(
        percentage=percentage,
        correct_count=correct_count,
        total=len(questions),
        passed=percentage >= pass_mark,
        per_question=per_question,
        elapsed_seconds=elapsed_seconds,
    )


def filter_results(result: ExamResult, only_failed: bool) -> list[QuestionResult]:
    results: Iterable[QuestionResult] = result.per_question
    if only_failed:
        results = (item for item in results if not item.is_correct)
    return list(results)
