"""
Validation layer for bucketsync.

Validates remote records before they enter a reconciliation pass so that
comparison only ever runs over well-formed, uniquely named records.
"""

import logging
from typing import Iterable, Optional

from bucketsync.models import FileRecord

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationLayer:
    """Validates file records before reconciliation."""

    @staticmethod
    def validate_record(record: FileRecord) -> None:
        """
        Validate a single record.

        Raises:
            ValidationError: If the record has no usable name
        """
        if not record.name or not record.name.strip():
            raise ValidationError(
                "File record name cannot be empty or whitespace only",
                field="name",
            )

    @staticmethod
    def validate_batch(records: Iterable[FileRecord]) -> None:
        """
        Validate a batch of records handed to a reconciliation pass.

        Raises:
            ValidationError: On an empty name or a name repeated in the batch
        """
        seen: set[str] = set()
        for record in records:
            ValidationLayer.validate_record(record)
            if record.name in seen:
                raise ValidationError(
                    f"Duplicate file record name in batch: {record.name}",
                    field="name",
                )
            seen.add(record.name)
