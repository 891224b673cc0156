"""Question bank endpoint."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from quiz_engine.errors import LoadFailure
from quiz_engine.records import question_to_payload

from practice_api.config import QUESTIONS_CACHE_MAX_AGE
from practice_api.services.question_service import QuestionBankService
from practice_api.services.session_service import get_question_bank

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("")
def list_questions(
    bank: Annotated[QuestionBankService, Depends(get_question_bank)],
    force: bool = False,
) -> JSONResponse:
    """Return the question bank, regenerating it when force=true."""
    try:
        questions, from_cache = bank.load(force=force)
    except LoadFailure as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    response = JSONResponse([question_to_payload(q) for q in questions])
    if from_cache:
        response.headers["Cache-Control"] = f"public, max-age={QUESTIONS_CACHE_MAX_AGE}"
    return response
