"""Core components for bucketsync."""

from bucketsync.core.conflict_resolver import (
    ConflictPolicy,
    LastWriterWinsPolicy,
    is_conflict,
)
from bucketsync.core.validation import ValidationError, ValidationLayer

__all__ = [
    "ConflictPolicy",
    "LastWriterWinsPolicy",
    "is_conflict",
    "ValidationError",
    "ValidationLayer",
]
