"""
Local Directory Store.

Treats a local directory (a shared drive, a mounted bucket) as the remote
object store. Object keys are file names directly under the root.
"""

import hashlib
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from bucketsync.models import FileRecord
from bucketsync.sync.adapter import StoreError

CHUNK_SIZE = 1024 * 1024


def md5_checksum(path: Path) -> str:
    """Hex MD5 of a file, the same fingerprint S3 uses as a simple ETag."""
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class LocalDirectoryStore:
    """Implementation of RemoteStore for a local filesystem directory."""

    def __init__(self, root: Path):
        """
        Initialize local directory store.

        Args:
            root: Directory holding the stored objects
        """
        self.root = Path(root).resolve()

    def initialize(self) -> None:
        """Create the store directory if it doesn't exist."""
        self.root.mkdir(parents=True, exist_ok=True)

    def load_all(self) -> List[FileRecord]:
        """List all regular files in the store directory."""
        if not self.root.exists():
            return []

        try:
            return [
                self._to_record(f)
                for f in sorted(self.root.iterdir())
                if f.is_file()
            ]
        except OSError as e:
            raise StoreError(f"Failed to list files in {self.root}: {e}") from e

    def save(self, local_path: Path) -> FileRecord:
        """Copy a file into the store, replacing any existing object."""
        local_path = Path(local_path)
        if not local_path.is_file():
            raise StoreError(f"Not a file: {local_path}")

        self.initialize()
        target = self.root / local_path.name
        try:
            if local_path.resolve() != target:
                shutil.copy2(local_path, target)
            return self._to_record(target)
        except OSError as e:
            raise StoreError(f"Failed to save file locally: {local_path.name}: {e}") from e

    def save_all(self, local_dir: Path) -> List[FileRecord]:
        """Copy every regular file directly inside ``local_dir``."""
        local_dir = Path(local_dir)
        if not local_dir.is_dir():
            raise StoreError(f"Not a directory: {local_dir}")
        return [self.save(f) for f in sorted(local_dir.iterdir()) if f.is_file()]

    def delete(self, record: FileRecord) -> None:
        """Delete a stored file."""
        target = self.root / record.name
        if not target.is_file():
            raise StoreError(f"Failed to delete local file: {record.name}")
        try:
            target.unlink()
        except OSError as e:
            raise StoreError(f"Failed to delete local file: {record.name}: {e}") from e

    def _to_record(self, file_path: Path) -> FileRecord:
        stat = file_path.stat()
        return FileRecord(
            name=file_path.name,
            path=str(file_path),
            size=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            checksum=md5_checksum(file_path),
            container_name=self.root.name,
        )
