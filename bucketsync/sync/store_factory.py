"""
Remote store factory for bucketsync.

Creates the appropriate remote store based on configuration.
"""

import logging

from bucketsync.config import Config, StoreBackend
from bucketsync.sync.adapter import RemoteStore

logger = logging.getLogger(__name__)


def create_remote_store(config: Config) -> RemoteStore:
    """
    Create a remote store based on configuration.

    Args:
        config: bucketsync configuration

    Returns:
        A remote store instance (local directory or S3)
    """
    if config.store_backend == StoreBackend.S3:
        return _create_s3_store(config)
    else:
        return _create_local_store(config)


def _create_s3_store(config: Config) -> RemoteStore:
    """Create S3 bucket store."""
    from bucketsync.sync.s3_adapter import S3Store

    if not config.bucket_name:
        raise ValueError(
            "A bucket name is required for the S3 store. "
            "Set bucket_name in config or use the 'local' store backend instead."
        )

    logger.info(f"Using S3 store: {config.bucket_name}")
    return S3Store(
        bucket_name=config.bucket_name,
        region=config.region,
        endpoint_url=config.endpoint_url,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
    )


def _create_local_store(config: Config) -> RemoteStore:
    """Create local directory store."""
    from bucketsync.sync.local_file_adapter import LocalDirectoryStore

    logger.info(f"Using local directory store: {config.resolved_store_path}")
    return LocalDirectoryStore(config.resolved_store_path)
