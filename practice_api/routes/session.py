"""
Session endpoints.

Handlers are async so they run on the event loop thread, the same thread
that fires exam timer ticks.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from quiz_engine.errors import (
    ConfirmationRequired,
    EmptyBookmarkSet,
    InvalidJump,
    InvalidTransition,
    LoadFailure,
    QuizError,
)
from quiz_engine.session import SessionController
from quiz_engine.view import controller_view

from practice_api.models import (
    BookmarkRequest,
    ConfirmRequest,
    JumpRequest,
    KeyRequest,
    NavigateRequest,
    SelectRequest,
)
from practice_api.services.session_service import get_controller

router = APIRouter(prefix="/api/session", tags=["session"])

Controller = Annotated[SessionController, Depends(get_controller)]

ERROR_STATUS = {
    InvalidJump: 400,
    EmptyBookmarkSet: 404,
    ConfirmationRequired: 409,
    InvalidTransition: 409,
    LoadFailure: 503,
}


def _http_error(exc: QuizError) -> HTTPException:
    status = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        400,
    )
    return HTTPException(status_code=status, detail=str(exc))


@router.get("")
async def get_session(controller: Controller) -> dict[str, object]:
    """Current screen view."""
    return controller_view(controller)


@router.post("/load")
async def load_questions(controller: Controller) -> dict[str, object]:
    """Retry loading the question bank."""
    try:
        controller.load_questions()
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/reload")
async def reload_questions(
    payload: ConfirmRequest, controller: Controller
) -> dict[str, object]:
    """Force regeneration of the question bank."""
    try:
        count = controller.reload_questions(payload.confirmed)
    except QuizError as exc:
        raise _http_error(exc) from exc
    view = controller_view(controller)
    view["notice"] = f"Successfully loaded {count} questions."
    return view


@router.post("/practice")
async def start_practice(controller: Controller) -> dict[str, object]:
    """Enter practice mode."""
    try:
        controller.enter_practice()
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/bookmarks")
async def start_bookmarks(controller: Controller) -> dict[str, object]:
    """Enter bookmark review."""
    try:
        controller.enter_bookmarks()
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/exam")
async def start_exam(controller: Controller) -> dict[str, object]:
    """Enter a timed exam."""
    try:
        controller.enter_exam()
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/navigate")
async def navigate(payload: NavigateRequest, controller: Controller) -> dict[str, object]:
    """Move to the previous/next question."""
    try:
        controller.navigate(payload.delta)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/jump")
async def jump(payload: JumpRequest, controller: Controller) -> dict[str, object]:
    """Jump to a question number."""
    try:
        controller.jump_to(payload.number)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/select")
async def select_option(payload: SelectRequest, controller: Controller) -> dict[str, object]:
    """Select or toggle an option."""
    try:
        controller.select(payload.optionIndex)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/check")
async def toggle_check(controller: Controller) -> dict[str, object]:
    """Reveal or hide the answer of the current practice question."""
    try:
        controller.toggle_check()
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/bookmark")
async def toggle_bookmark(
    payload: BookmarkRequest, controller: Controller
) -> dict[str, object]:
    """Toggle a bookmark."""
    try:
        controller.toggle_bookmark(payload.questionId)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/submit")
async def submit_exam(payload: ConfirmRequest, controller: Controller) -> dict[str, object]:
    """Submit the running exam."""
    try:
        controller.submit(payload.confirmed)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/exit")
async def exit_session(payload: ConfirmRequest, controller: Controller) -> dict[str, object]:
    """Return to the menu."""
    try:
        controller.exit(payload.confirmed)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.post("/key")
async def press_key(payload: KeyRequest, controller: Controller) -> dict[str, object]:
    """Keyboard shortcut."""
    try:
        controller.handle_key(payload.key, payload.confirmed)
    except QuizError as exc:
        raise _http_error(exc) from exc
    return controller_view(controller)


@router.get("/result")
async def get_result(controller: Controller, onlyFailed: bool = False) -> dict[str, object]:
    """Exam summary, optionally restricted to incorrect answers."""
    if controller.result is None:
        raise HTTPException(status_code=404, detail="No exam result")
    return controller_view(controller, only_failed=onlyFailed)
