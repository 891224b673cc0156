"""Bookmark endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from quiz_engine.session import SessionController

from practice_api.services.session_service import get_controller

router = APIRouter(prefix="/api/bookmarks", tags=["bookmarks"])


@router.get("")
async def list_bookmarks(
    controller: Annotated[SessionController, Depends(get_controller)],
) -> dict[str, object]:
    """List bookmarked question ids."""
    return {"bookmarks": sorted(controller.bookmarks.ids)}
