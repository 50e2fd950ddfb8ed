"""
File Manager for bucketsync.

Composition root for file operations:
- Upload (store, then record the event)
- Delete (store, then record the event)
- List remote objects / cached metadata
- Sync (bulk reconciliation) and status (unresolved audit)
"""

import logging
from pathlib import Path
from typing import List, Optional

from bucketsync.config import Config
from bucketsync.models import FileRecord, ReconciliationResult
from bucketsync.storage.repository import MetadataRepository
from bucketsync.storage.sqlite_db import SQLiteMetadataRepository
from bucketsync.sync.adapter import RemoteStore
from bucketsync.sync.engine import ReconciliationEngine
from bucketsync.sync.events import EventRecorder, FileEventListener
from bucketsync.sync.store_factory import create_remote_store

logger = logging.getLogger(__name__)


class FileManager:
    """
    Coordinates the remote store, the metadata cache and reconciliation.

    User actions hit the remote store first; the listener is only notified
    once the store call succeeded.
    """

    def __init__(
        self,
        repository: MetadataRepository,
        store: RemoteStore,
        listener: Optional[FileEventListener] = None,
        engine: Optional[ReconciliationEngine] = None,
    ):
        """Initialize the file manager."""
        self.repository = repository
        self.store = store
        self.listener = listener if listener is not None else EventRecorder(repository)
        self.engine = engine or ReconciliationEngine(repository, store)

    @classmethod
    def from_config(cls, config: Config) -> "FileManager":
        """Build a file manager from configuration."""
        repository = SQLiteMetadataRepository(config.sqlite_path)
        store = create_remote_store(config)
        return cls(repository=repository, store=store)

    def upload(self, path: Path) -> FileRecord:
        """
        Upload a local file and record it in the cache.

        Raises:
            StoreError: If the upload fails (nothing is recorded)
            EventError: If the upload succeeded but the cache update failed
        """
        record = self.store.save(Path(path))
        logger.info(f"Uploaded {record.name}")
        self.listener.on_save(record)
        return record

    def delete(self, name: str) -> FileRecord:
        """
        Delete a remote object and forget its cached metadata.

        Raises:
            StoreError: If the remote delete fails
            EventError: If the file is not tracked in the cache
        """
        record = self.repository.find_by_name(name) or FileRecord(name=name)
        self.store.delete(record)
        logger.info(f"Deleted {name}")
        self.listener.on_delete(record)
        return record

    def list_remote(self) -> List[FileRecord]:
        """List objects currently in the remote store."""
        return self.store.load_all()

    def list_cached(self) -> List[FileRecord]:
        """List records in the metadata cache."""
        return self.repository.find_all()

    def sync(self) -> ReconciliationResult:
        """Reconcile the cache against a full remote listing."""
        remote_records = self.store.load_all()
        logger.info(f"Syncing {len(remote_records)} remote file(s) with the metadata cache")
        return self.engine.sync_files(remote_records)

    def conflicted(self) -> List[FileRecord]:
        """Conflicts resolved by the last sync."""
        return self.engine.get_conflicted_files()

    def status(self) -> List[FileRecord]:
        """Remote files that still differ from the cache."""
        return self.engine.unresolved_files()
