"""Storage layer for bucketsync."""

from bucketsync.storage.repository import MetadataRepository, RepositoryError
from bucketsync.storage.sqlite_db import SQLiteMetadataRepository

__all__ = ["MetadataRepository", "RepositoryError", "SQLiteMetadataRepository"]
