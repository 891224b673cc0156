"""Pydantic records for the question bank wire format."""
import logging

from pydantic import BaseModel, Field, ValidationError

from quiz_engine.errors import LoadFailure
from quiz_engine.models import Image, Option, Question

log = logging.getLogger(__name__)


class OptionRecord(BaseModel):
    """Single answer option as stored in the question bank."""

    text: str
    isCorrect: bool = False


class ImageRecord(BaseModel):
    """Image attached to a question."""

    src: str
    alt: str = ""


class QuestionRecord(BaseModel):
    """Question bank entry."""

    id: int
    question: str
    expectedAnswers: int = Field(1, ge=1)
    options: list[OptionRecord] = Field(default_factory=list)
    images: list[ImageRecord] = Field(default_factory=list)

    def to_question(self) -> Question:
        """Convert to the immutable engine model."""
        return Question(
            id=self.id,
            question=self.question,
            expected_answers=self.expectedAnswers,
            options=tuple(Option(o.text, o.isCorrect) for o in self.options),
            images=tuple(Image(i.src, i.alt) for i in self.images),
        )


def question_to_payload(question: Question) -> dict[str, object]:
    """Serialize a question back to the wire format."""
    return {
        "id": question.id,
        "question": question.question,
        "expectedAnswers": question.expected_answers,
        "options": [
            {"text": option.text, "isCorrect": option.is_correct}
            for option in question.options
        ],
        "images": [{"src": image.src, "alt": image.alt} for image in question.images],
    }


def parse_question_bank(payload: object) -> list[Question]:
    """
    Validate a question bank payload.

    Entries that fail validation or repeat an id are skipped. A payload that
    is not a list, or that yields no usable question, raises LoadFailure.
    """
    if not isinstance(payload, list):
        raise LoadFailure("Invalid questions data: expected a list")
    if not payload:
        raise LoadFailure("Invalid or empty questions data")

    questions: list[Question] = []
    seen: set[int] = set()
    for position, item in enumerate(payload):
        try:
            record = QuestionRecord.model_validate(item)
        except ValidationError as exc:
            log.warning("Skipping malformed question at position %s: %s", position, exc)
            continue
        if record.id in seen:
            log.warning("Skipping duplicate question id %s", record.id)
            continue
        seen.add(record.id)
        questions.append(record.to_question())

    if not questions:
        raise LoadFailure("Invalid or empty questions data")
    return questions
