"""Database models."""
from practice_api.models.db.storage_entry import StorageEntry

__all__ = ["StorageEntry"]
