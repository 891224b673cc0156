"""Pydantic models."""
from practice_api.models.session import (
    BookmarkRequest,
    ConfirmRequest,
    JumpRequest,
    KeyRequest,
    NavigateRequest,
    SelectRequest,
)

__all__ = [
    "BookmarkRequest",
    "ConfirmRequest",
    "JumpRequest",
    "KeyRequest",
    "NavigateRequest",
    "SelectRequest",
]
