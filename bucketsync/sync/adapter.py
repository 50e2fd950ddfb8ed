"""
Remote Store Protocol for bucketsync.

Defines the interface for remote object stores (local directory, S3, etc.).
"""

from pathlib import Path
from typing import List, Protocol

from bucketsync.models import FileRecord


class StoreError(Exception):
    """Remote store unreachable, authentication failure, or object not found."""


class RemoteStore(Protocol):
    """Interface for remote object stores."""

    def load_all(self) -> List[FileRecord]:
        """List every object in the store as FileRecord metadata."""
        ...

    def save(self, local_path: Path) -> FileRecord:
        """
        Upload a local file.

        Args:
            local_path: File to upload; its name becomes the object key

        Returns:
            Metadata of the stored object
        """
        ...

    def save_all(self, local_dir: Path) -> List[FileRecord]:
        """Upload every regular file directly inside ``local_dir``."""
        ...

    def delete(self, record: FileRecord) -> None:
        """Delete the object addressed by ``record.name``."""
        ...
