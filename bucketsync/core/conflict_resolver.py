"""
Conflict detection and resolution for bucketsync.

A conflict is any checksum or modification-time mismatch between the cached
record and the remote one. The default policy is last-writer-wins with ties
going to the remote side.
"""

from datetime import datetime, timezone
from typing import Optional, Protocol

from bucketsync.models import ConflictResolution, FileRecord

# Missing timestamps sort before everything else
OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def is_conflict(local: FileRecord, remote: FileRecord) -> bool:
    """Check whether two versions of a record disagree.

    Exact equality on checksum and modified_at. A missing value on either
    side never matches, so absent metadata always counts as a conflict.
    """
    if local.checksum is None or remote.checksum is None:
        return True
    if local.modified_at is None or remote.modified_at is None:
        return True
    return local.checksum != remote.checksum or local.modified_at != remote.modified_at


class ConflictPolicy(Protocol):
    """Strategy picking the record to keep for a conflicting pair.

    Returning None leaves the file unresolved for the current pass.
    """

    def resolve(self, local: FileRecord, remote: FileRecord) -> Optional[FileRecord]:
        ...


class LastWriterWinsPolicy:
    """Keep the record with the later modified_at; ties favour remote."""

    def resolve(self, local: FileRecord, remote: FileRecord) -> FileRecord:
        local_time = local.modified_at or OLDEST
        remote_time = remote.modified_at or OLDEST
        return remote if remote_time >= local_time else local


def classify_resolution(
    local: FileRecord,
    remote: FileRecord,
    resolved: Optional[FileRecord],
) -> ConflictResolution:
    """Name the outcome of a resolution for logging and reporting."""
    if resolved is None:
        return ConflictResolution.UNRESOLVED
    if resolved is local or resolved == local:
        return ConflictResolution.LOCAL_WINS
    return ConflictResolution.REMOTE_WINS
