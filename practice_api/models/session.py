"""Session request models."""
from pydantic import BaseModel


class ConfirmRequest(BaseModel):
    """Body for guarded destructive actions."""

    confirmed: bool = False


class NavigateRequest(BaseModel):
    """Move relative to the current question."""

    delta: int


class JumpRequest(BaseModel):
    """Jump to a 1-based question number (raw user input)."""

    number: int | str


class SelectRequest(BaseModel):
    """Select an option by its original index."""

    optionIndex: int


class BookmarkRequest(BaseModel):
    """Toggle a bookmark; defaults to the current question."""

    questionId: int | None = None


class KeyRequest(BaseModel):
    """Keyboard shortcut."""

    key: str
    confirmed: bool = False
