"""
Tests for conflict detection and last-writer-wins resolution.
"""

from datetime import timedelta

import pytest

from bucketsync.core.conflict_resolver import (
    LastWriterWinsPolicy,
    classify_resolution,
    is_conflict,
)
from bucketsync.models import ConflictResolution, FileRecord


class TestIsConflict:
    """Tests for the conflict predicate."""

    def test_identical_records_do_not_conflict(self, make_record):
        assert is_conflict(make_record(), make_record()) is False

    def test_checksum_mismatch_conflicts(self, make_record):
        assert is_conflict(make_record(checksum="c1"), make_record(checksum="c2")) is True

    def test_timestamp_mismatch_conflicts(self, make_record, t1):
        later = t1 + timedelta(seconds=1)
        assert is_conflict(make_record(modified_at=t1), make_record(modified_at=later)) is True

    def test_no_tolerance_window(self, make_record, t1):
        """Test that even a microsecond difference is a conflict."""
        later = t1 + timedelta(microseconds=1)
        assert is_conflict(make_record(modified_at=t1), make_record(modified_at=later)) is True

    def test_other_fields_ignored(self, make_record):
        local = make_record(size=1, path="/a", version="1")
        remote = make_record(size=99, path=None, version="7")

        assert is_conflict(local, remote) is False

    @pytest.mark.parametrize("field", ["checksum", "modified_at"])
    def test_missing_value_is_conflict(self, make_record, field):
        """Test that absent metadata never matches, even on both sides."""
        local = make_record(**{field: None})
        remote = make_record(**{field: None})

        assert is_conflict(local, remote) is True
        assert is_conflict(make_record(), remote) is True

    def test_symmetry(self, make_record, t1, t2):
        pairs = [
            (make_record(checksum="c1"), make_record(checksum="c2")),
            (make_record(modified_at=t1), make_record(modified_at=t2)),
            (make_record(checksum=None), make_record()),
            (make_record(), make_record()),
        ]
        for a, b in pairs:
            assert is_conflict(a, b) == is_conflict(b, a)


class TestLastWriterWins:
    """Tests for the default resolution policy."""

    def test_newer_remote_wins(self, make_record, t1, t2):
        local = make_record(checksum="c1", modified_at=t1)
        remote = make_record(checksum="c2", modified_at=t2)

        assert LastWriterWinsPolicy().resolve(local, remote) is remote

    def test_newer_local_wins(self, make_record, t1, t2):
        local = make_record(checksum="c1", modified_at=t2)
        remote = make_record(checksum="c2", modified_at=t1)

        assert LastWriterWinsPolicy().resolve(local, remote) is local

    def test_swap_returns_same_winner(self, make_record, t1, t2):
        """Test that the later record wins regardless of argument order."""
        older = make_record(checksum="c1", modified_at=t1)
        newer = make_record(checksum="c2", modified_at=t2)
        policy = LastWriterWinsPolicy()

        assert policy.resolve(older, newer) is newer
        assert policy.resolve(newer, older) is newer

    def test_tie_favours_remote(self, make_record, t1):
        local = make_record(checksum="c1", modified_at=t1)
        remote = make_record(checksum="c2", modified_at=t1)
        policy = LastWriterWinsPolicy()

        assert policy.resolve(local, remote) is remote
        assert policy.resolve(remote, local) is local

    def test_missing_timestamp_is_oldest(self, make_record, t1):
        undated = make_record(checksum="c1", modified_at=None)
        dated = make_record(checksum="c2", modified_at=t1)
        policy = LastWriterWinsPolicy()

        assert policy.resolve(undated, dated) is dated
        assert policy.resolve(dated, undated) is dated

    def test_both_missing_favours_remote(self):
        local = FileRecord(name="a.txt", checksum="c1")
        remote = FileRecord(name="a.txt", checksum="c2")

        assert LastWriterWinsPolicy().resolve(local, remote) is remote


class TestClassifyResolution:
    """Tests for naming resolution outcomes."""

    def test_outcomes(self, make_record, t1, t2):
        local = make_record(checksum="c1", modified_at=t1)
        remote = make_record(checksum="c2", modified_at=t2)

        assert classify_resolution(local, remote, remote) == ConflictResolution.REMOTE_WINS
        assert classify_resolution(local, remote, local) == ConflictResolution.LOCAL_WINS
        assert classify_resolution(local, remote, None) == ConflictResolution.UNRESOLVED

    def test_copy_of_local_counts_as_local(self, make_record):
        local = make_record(checksum="c1")
        remote = make_record(checksum="c2")

        assert classify_resolution(local, remote, local.model_copy()) == ConflictResolution.LOCAL_WINS
