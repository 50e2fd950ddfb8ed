"""
Configuration management for bucketsync.

Handles loading, validating, and persisting configuration from YAML files.
Default location: ~/.bucketsync/config.yaml
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_storage_path() -> Path:
    """Get the default storage path for bucketsync."""
    return Path.home() / ".bucketsync"


class StoreBackend(str, Enum):
    """Available remote store backends."""
    LOCAL = "local"  # a directory standing in for a bucket
    S3 = "s3"


class Config(BaseSettings):
    """bucketsync configuration settings."""

    model_config = SettingsConfigDict(env_prefix="BUCKETSYNC_", env_file=".env", extra="ignore")

    # Storage settings
    storage_path: Path = Field(default_factory=get_default_storage_path)

    # Remote store settings
    store_backend: StoreBackend = Field(default=StoreBackend.LOCAL)
    store_path: Optional[Path] = None

    # S3 settings (used when store_backend = "s3")
    bucket_name: Optional[str] = None
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    connect_timeout: int = Field(default=5, ge=1)
    read_timeout: int = Field(default=30, ge=1)

    # Logging
    log_level: str = Field(default="INFO")

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = get_default_storage_path() / "config.yaml"

        if config_path.exists():
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)

        return cls()

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = self.storage_path / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "storage_path": str(self.storage_path),
            "store_backend": self.store_backend.value,
            "store_path": str(self.store_path) if self.store_path else None,
            "bucket_name": self.bucket_name,
            "region": self.region,
            "endpoint_url": self.endpoint_url,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "log_level": self.log_level,
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
        return config_path

    @property
    def sqlite_path(self) -> Path:
        """Get the SQLite metadata cache path."""
        return self.storage_path / "sqlite" / "bucketsync.db"

    @property
    def logs_path(self) -> Path:
        """Get the logs directory path."""
        return self.storage_path / "logs"

    @property
    def resolved_store_path(self) -> Path:
        """Root directory of the local store backend."""
        return self.store_path or self.storage_path / "remote"

    def ensure_directories(self) -> None:
        """Create all necessary directories."""
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
        self.logs_path.mkdir(parents=True, exist_ok=True)
        if self.store_backend == StoreBackend.LOCAL:
            self.resolved_store_path.mkdir(parents=True, exist_ok=True)
