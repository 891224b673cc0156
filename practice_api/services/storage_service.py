"""Durable key/value storage backed by the application database."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from quiz_engine.errors import StorageFailure

from practice_api.database import SessionLocal
from practice_api.models.db.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class DatabaseStorage:
    """KeyValueStorage implementation using the storage_entries table."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def get(self, key: str) -> str | None:
        """Read a value, None when the key was never written."""
        try:
            db = self.session_factory()
            try:
                entry = db.get(StorageEntry, key)
                return entry.value if entry else None
            finally:
                db.close()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read storage key {key}: {e}")
            raise StorageFailure(str(e)) from e

    def set(self, key: str, value: str) -> None:
        """Insert or update a value."""
        try:
            db = self.session_factory()
            try:
                entry = db.get(StorageEntry, key)
                if entry:
                    entry.value = value
                else:
                    db.add(StorageEntry(key=key, value=value))
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
            finally:
                db.close()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write storage key {key}: {e}")
            raise StorageFailure(str(e)) from e
