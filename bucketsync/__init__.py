"""
bucketsync - Track files in a remote object store against a local metadata cache.

Detects drift between the remote store and the cache, resolves conflicts
with a last-writer-wins policy, and reports files that need attention.
"""

from bucketsync.models import FileKind, FileRecord, ReconciliationResult
from bucketsync.storage.sqlite_db import SQLiteMetadataRepository
from bucketsync.sync.engine import ReconciliationEngine
from bucketsync.sync.events import EventRecorder
from bucketsync.config import Config

__version__ = "0.1.0"
__all__ = [
    "FileKind",
    "FileRecord",
    "ReconciliationResult",
    "SQLiteMetadataRepository",
    "ReconciliationEngine",
    "EventRecorder",
    "Config",
]
