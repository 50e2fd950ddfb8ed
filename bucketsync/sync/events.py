"""
Event recording for bucketsync.

Applies individual user-triggered file events (upload, update, delete)
straight to the metadata repository, keeping the cache current between
reconciliation passes.
"""

import logging
from typing import Optional, Protocol

from bucketsync.models import FileRecord
from bucketsync.storage.repository import MetadataRepository, RepositoryError

logger = logging.getLogger(__name__)


class EventError(Exception):
    """Raised when a file event cannot be applied to the repository."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class FileEventListener(Protocol):
    """Callbacks fired after a file action succeeded against the remote store."""

    def on_save(self, record: FileRecord) -> None: ...
    def on_update(self, record: FileRecord) -> None: ...
    def on_delete(self, record: FileRecord) -> None: ...


class EventRecorder:
    """
    FileEventListener that persists events to a MetadataRepository.

    Every call is a single repository round trip. There is no batching and
    no retrying; a failure only affects the event that raised it.
    """

    def __init__(self, repository: MetadataRepository):
        self.repository = repository

    def on_save(self, record: FileRecord) -> None:
        """Record a newly stored file."""
        try:
            self.repository.save_or_update(record)
        except RepositoryError as e:
            logger.error(f"Failed to save file metadata, error: {e}")
            raise EventError("Failed to save file metadata", e) from e

    def on_update(self, record: FileRecord) -> None:
        """Refresh the metadata of a tracked file."""
        self._require_tracked(record, "update")
        try:
            self.repository.save_or_update(record)
        except RepositoryError as e:
            logger.error(f"Failed to update file metadata, error: {e}")
            raise EventError("Failed to update file metadata", e) from e

    def on_delete(self, record: FileRecord) -> None:
        """Forget a deleted file."""
        self._require_tracked(record, "deletion")
        try:
            self.repository.delete(record.name)
        except RepositoryError as e:
            logger.error(f"Failed to delete file metadata, error: {e}")
            raise EventError("Failed to delete file metadata", e) from e

    def _require_tracked(self, record: FileRecord, action: str) -> None:
        try:
            tracked = self.repository.exists(record.name)
        except RepositoryError as e:
            logger.error(f"Failed to check file metadata for {action}, error: {e}")
            raise EventError(f"Failed to check file metadata for {action}", e) from e
        if not tracked:
            raise EventError(f"File not found for {action}: {record.name}")
