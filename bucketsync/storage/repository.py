"""
Metadata Repository Protocol for bucketsync.

Defines the interface the sync engine and event recorder use to read and
write cached file metadata.
"""

from typing import List, Optional, Protocol

from bucketsync.models import FileRecord


class RepositoryError(Exception):
    """Local metadata persistence failure (disk, schema, connection)."""


class MetadataRepository(Protocol):
    """Persistent key-value store of FileRecord keyed by name."""

    def find_by_name(self, name: str) -> Optional[FileRecord]:
        """Return the cached record for ``name``, or None."""
        ...

    def save_or_update(self, record: FileRecord) -> None:
        """Insert a record, or refresh the metadata of an existing one."""
        ...

    def save_or_update_files(self, records: List[FileRecord]) -> None:
        """Upsert many records in one all-or-nothing transaction."""
        ...

    def delete(self, name: str) -> None:
        """Delete the record for ``name``."""
        ...

    def exists(self, name: str) -> bool:
        """Check whether a record exists for ``name``."""
        ...

    def find_all(self) -> List[FileRecord]:
        """Return every cached record."""
        ...
