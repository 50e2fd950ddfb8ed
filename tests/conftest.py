"""
Shared pytest fixtures for bucketsync tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from bucketsync.models import FileRecord
from bucketsync.storage.sqlite_db import SQLiteMetadataRepository
from bucketsync.sync.local_file_adapter import LocalDirectoryStore

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _make_record(name="a.txt", checksum="c1", modified_at=T0, **kwargs) -> FileRecord:
    kwargs.setdefault("container_name", "bucket")
    return FileRecord(name=name, checksum=checksum, modified_at=modified_at, **kwargs)


@pytest.fixture
def make_record():
    """Factory building FileRecords with sensible defaults."""
    return _make_record


@pytest.fixture
def t1():
    return T0


@pytest.fixture
def t2():
    return T0 + timedelta(hours=1)


@pytest.fixture
def temp_repo(tmp_path):
    """Initialized SQLiteMetadataRepository at a temp path."""
    return SQLiteMetadataRepository(tmp_path / "db" / "bucketsync.db")


@pytest.fixture
def store_dir(tmp_path):
    path = tmp_path / "remote"
    path.mkdir()
    return path


@pytest.fixture
def local_store(store_dir):
    """A LocalDirectoryStore rooted in a temp directory."""
    return LocalDirectoryStore(store_dir)
