"""
Tests for the FileRecord model and builder.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from bucketsync.models import FileKind, FileRecord, ReconciliationResult


class TestFileRecord:
    """Tests for FileRecord defaults and validation."""

    def test_defaults(self):
        """Test version and kind defaults when not provided."""
        record = FileRecord(name="a.txt")

        assert record.version == "1"
        assert record.kind == FileKind.FILE
        assert record.kind.value == "File"
        assert record.size == 0
        assert record.checksum is None
        assert record.modified_at is None

    def test_none_version_becomes_default(self):
        """Test that an explicit None version is replaced with '1'."""
        record = FileRecord(name="a.txt", version=None, kind=None)

        assert record.version == "1"
        assert record.kind == FileKind.FILE

    def test_empty_name_rejected(self):
        """Test that records cannot be created without a name."""
        with pytest.raises(PydanticValidationError):
            FileRecord(name="")

    def test_negative_size_rejected(self):
        with pytest.raises(PydanticValidationError):
            FileRecord(name="a.txt", size=-1)

    def test_naive_timestamp_normalized_to_utc(self):
        """Test that naive datetimes are treated as UTC."""
        record = FileRecord(name="a.txt", modified_at=datetime(2024, 1, 1, 8, 30))

        assert record.modified_at == datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)
        assert record.modified_at.tzinfo is not None

    def test_structural_equality(self):
        """Test that records with the same fields compare equal."""
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        a = FileRecord(name="a.txt", checksum="c1", modified_at=ts)
        b = FileRecord(name="a.txt", checksum="c1", modified_at=ts)

        assert a == b
        assert a is not b


class TestFileRecordBuilder:
    """Tests for the fluent builder."""

    def test_builder_sets_all_fields(self):
        ts = datetime(2024, 3, 2, 10, 0, tzinfo=timezone.utc)
        record = (
            FileRecord.builder()
            .name("report.pdf")
            .path("/data/report.pdf")
            .size(2048)
            .modified_at(ts)
            .checksum("abc123")
            .version("v7")
            .container_name("my-bucket")
            .kind(FileKind.FOLDER)
            .build()
        )

        assert record.name == "report.pdf"
        assert record.path == "/data/report.pdf"
        assert record.size == 2048
        assert record.modified_at == ts
        assert record.checksum == "abc123"
        assert record.version == "v7"
        assert record.container_name == "my-bucket"
        assert record.kind == FileKind.FOLDER

    def test_builder_applies_defaults(self):
        record = FileRecord.builder().name("a.txt").version(None).build()

        assert record.version == "1"
        assert record.kind == FileKind.FILE

    def test_builder_without_name_fails(self):
        with pytest.raises(PydanticValidationError):
            FileRecord.builder().checksum("c1").build()


class TestReconciliationResult:
    """Tests for the pass summary."""

    def test_empty_result(self):
        result = ReconciliationResult()

        assert result.conflicted == []
        assert result.written == 0
        assert result.caught_up is False

    def test_caught_up_when_files_were_absorbed(self):
        result = ReconciliationResult(unresolved=["b.txt"], written=2)

        assert result.caught_up is True
