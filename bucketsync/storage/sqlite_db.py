"""
SQLite metadata repository for bucketsync.

This is the local cache of remote file metadata. Every operation opens its
own connection, so the repository can be shared between the sync pass and
the event recorder running on another thread.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator, Optional

from bucketsync.models import FileKind, FileRecord
from bucketsync.storage.repository import RepositoryError

logger = logging.getLogger(__name__)

# Current schema version
SCHEMA_VERSION = 1

UPSERT_SQL = """
    INSERT INTO file_metadata
    (name, path, size, modified_at, checksum, version, container_name, kind)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(name) DO UPDATE SET
        modified_at = excluded.modified_at,
        size = excluded.size,
        checksum = excluded.checksum,
        version = excluded.version
"""


class SQLiteMetadataRepository:
    """SQLite-backed MetadataRepository."""

    def __init__(self, db_path: Path):
        """Initialize the database and create the schema if needed."""
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a connection that commits on success and rolls back on error."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise RepositoryError(f"Cannot open metadata database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RepositoryError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS file_metadata (
                    name TEXT PRIMARY KEY NOT NULL,
                    path TEXT,
                    size INTEGER NOT NULL DEFAULT 0,
                    modified_at TEXT,
                    checksum TEXT,
                    version TEXT NOT NULL DEFAULT '1',
                    container_name TEXT,
                    kind TEXT NOT NULL DEFAULT 'File'
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL,
                    description TEXT
                )
            """)
            cursor.execute(
                """
                INSERT OR IGNORE INTO schema_version (version, applied_at, description)
                VALUES (?, ?, ?)
                """,
                (SCHEMA_VERSION, datetime.now(timezone.utc).isoformat(), "file metadata cache"),
            )

    # ========== Record Operations ==========

    def save_or_update(self, record: FileRecord) -> None:
        """Insert a record or refresh modified_at, size, checksum and version."""
        try:
            with self._get_connection() as conn:
                conn.execute(UPSERT_SQL, self._record_to_row(record))
        except RepositoryError as e:
            logger.error(f"Failed to save or update {record.name}: {e}")
            raise
        logger.debug(f"Saved file record {record.name}")

    def save_or_update_files(self, records: list[FileRecord]) -> None:
        """Upsert a batch of records in a single transaction."""
        if not records:
            return
        try:
            with self._get_connection() as conn:
                conn.executemany(UPSERT_SQL, [self._record_to_row(r) for r in records])
        except RepositoryError as e:
            logger.error(f"Failed to save or update batch of {len(records)} records: {e}")
            raise
        logger.debug(f"Saved batch of {len(records)} file records")

    def find_by_name(self, name: str) -> Optional[FileRecord]:
        """Get a record by name."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM file_metadata WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return self._row_to_record(row)

    def delete(self, name: str) -> None:
        """Delete a record by name."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM file_metadata WHERE name = ?", (name,))

    def exists(self, name: str) -> bool:
        """Check whether a record exists."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT 1 FROM file_metadata WHERE name = ?", (name,))
            return cursor.fetchone() is not None

    def find_all(self) -> list[FileRecord]:
        """List all cached records ordered by name."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM file_metadata ORDER BY name")
            return [self._row_to_record(row) for row in cursor.fetchall()]

    def count(self) -> int:
        """Count cached records."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) as count FROM file_metadata")
            row = cursor.fetchone()
            return row["count"] if row else 0

    def get_schema_version(self) -> int:
        """Get the current schema version."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT MAX(version) as v FROM schema_version")
            row = cursor.fetchone()
            return row["v"] if row and row["v"] else SCHEMA_VERSION

    # ========== Row Mapping ==========

    @staticmethod
    def _record_to_row(record: FileRecord) -> tuple:
        return (
            record.name,
            record.path,
            record.size,
            record.modified_at.isoformat() if record.modified_at else None,
            record.checksum,
            record.version,
            record.container_name,
            record.kind.value,
        )

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> FileRecord:
        """Convert a database row to a FileRecord."""
        return FileRecord(
            name=row["name"],
            path=row["path"],
            size=row["size"],
            modified_at=datetime.fromisoformat(row["modified_at"]) if row["modified_at"] else None,
            checksum=row["checksum"],
            version=row["version"],
            container_name=row["container_name"],
            kind=FileKind(row["kind"]),
        )
