"""
Data models for bucketsync.

These Pydantic models define the metadata records that flow between the
remote store, the local metadata cache and the reconciliation engine.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_VERSION = "1"


class FileKind(str, Enum):
    """Display classification of a tracked entry."""

    FILE = "File"
    FOLDER = "Folder"


class FileRecord(BaseModel):
    """Metadata for one tracked file, keyed by name."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1)
    path: Optional[str] = None
    size: int = Field(default=0, ge=0)
    modified_at: Optional[datetime] = None
    checksum: Optional[str] = None
    version: str = DEFAULT_VERSION
    container_name: Optional[str] = None
    kind: FileKind = FileKind.FILE

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value):
        return DEFAULT_VERSION if value is None or value == "" else str(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _default_kind(cls, value):
        return FileKind.FILE if value is None else value

    @field_validator("modified_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are taken as UTC so comparisons never mix naive/aware
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def builder(cls) -> "FileRecordBuilder":
        return FileRecordBuilder()


class FileRecordBuilder:
    """Fluent builder for FileRecord.

    Example:
        >>> FileRecord.builder().name("a.txt").checksum("c1").build()
    """

    def __init__(self):
        self._fields: dict = {}

    def name(self, name: str) -> "FileRecordBuilder":
        self._fields["name"] = name
        return self

    def path(self, path: Optional[str]) -> "FileRecordBuilder":
        self._fields["path"] = path
        return self

    def size(self, size: int) -> "FileRecordBuilder":
        self._fields["size"] = size
        return self

    def modified_at(self, modified_at: Optional[datetime]) -> "FileRecordBuilder":
        self._fields["modified_at"] = modified_at
        return self

    def checksum(self, checksum: Optional[str]) -> "FileRecordBuilder":
        self._fields["checksum"] = checksum
        return self

    def version(self, version: Optional[str]) -> "FileRecordBuilder":
        self._fields["version"] = version
        return self

    def container_name(self, container_name: Optional[str]) -> "FileRecordBuilder":
        self._fields["container_name"] = container_name
        return self

    def kind(self, kind: Optional[FileKind]) -> "FileRecordBuilder":
        self._fields["kind"] = kind
        return self

    def build(self) -> FileRecord:
        """Validate the collected fields and return the record."""
        return FileRecord(**self._fields)


class ConflictResolution(str, Enum):
    """Which side a conflict resolution kept."""

    LOCAL_WINS = "local_wins"
    REMOTE_WINS = "remote_wins"
    UNRESOLVED = "unresolved"


class ReconciliationResult(BaseModel):
    """Summary of one reconciliation pass."""

    conflicted: list[str] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    written: int = 0

    @property
    def caught_up(self) -> bool:
        """True when the pass re-asserted the whole remote batch."""
        return len(self.unresolved) > 0
