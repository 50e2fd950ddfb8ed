"""Remote stores, event recording and reconciliation for bucketsync."""

from bucketsync.sync.adapter import RemoteStore, StoreError
from bucketsync.sync.engine import ReconciliationEngine
from bucketsync.sync.events import EventError, EventRecorder, FileEventListener
from bucketsync.sync.local_file_adapter import LocalDirectoryStore

__all__ = [
    "RemoteStore",
    "StoreError",
    "ReconciliationEngine",
    "EventError",
    "EventRecorder",
    "FileEventListener",
    "LocalDirectoryStore",
]
