"""API routes."""
from practice_api.routes import bookmarks, questions, session

__all__ = ["bookmarks", "questions", "session"]
