"""Errors raised by the quiz engine."""


class QuizError(Exception):
    """Base class for quiz engine errors."""


class LoadFailure(QuizError):
    """Question bank is unavailable or malformed."""


class InvalidJump(QuizError):
    """Requested question number is outside the current session."""


class EmptyBookmarkSet(QuizError):
    """Bookmark review requested without any bookmarked question."""


class StorageFailure(QuizError):
    """Durable storage could not be read or written."""


class ConfirmationRequired(QuizError):
    """Destructive action attempted without explicit confirmation."""


class InvalidTransition(QuizError):
    """Operation is not available on the current screen."""
