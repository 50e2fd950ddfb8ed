"""
S3 Remote Store.

Tracks objects in an S3 (or S3-compatible) bucket. Credentials come from
boto3's standard credential chain (environment, shared config, instance role).
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from bucketsync.models import FileRecord
from bucketsync.sync.adapter import StoreError

logger = logging.getLogger(__name__)


def _normalize_etag(etag: Optional[str]) -> Optional[str]:
    if not etag:
        return None
    return etag.strip().strip('"').lower()


def create_s3_client(
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    connect_timeout: int = 5,
    read_timeout: int = 30,
) -> Any:
    """Create an S3 client with bounded timeouts and a limited retry policy."""
    config = BotoConfig(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": 3, "mode": "standard"},
    )
    kwargs: dict[str, Any] = {"config": config}
    if region:
        kwargs["region_name"] = region
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.client("s3", **kwargs)


class S3Store:
    """Implementation of RemoteStore for an S3 bucket."""

    def __init__(
        self,
        bucket_name: str,
        client: Any = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        connect_timeout: int = 5,
        read_timeout: int = 30,
    ):
        """
        Initialize S3 store.

        Args:
            bucket_name: Bucket holding the tracked objects
            client: Pre-built boto3 S3 client (created lazily if omitted)
            region: AWS region for a lazily created client
            endpoint_url: Custom endpoint for S3-compatible services
        """
        self.bucket_name = bucket_name
        self._client = client
        self._client_kwargs = {
            "region": region,
            "endpoint_url": endpoint_url,
            "connect_timeout": connect_timeout,
            "read_timeout": read_timeout,
        }

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = create_s3_client(**self._client_kwargs)
        return self._client

    def load_all(self) -> List[FileRecord]:
        """List all objects in the bucket."""
        records: List[FileRecord] = []
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name):
                for obj in page.get("Contents", []):
                    records.append(self._summary_to_record(obj))
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to list objects in bucket {self.bucket_name}: {e}")
            raise StoreError(
                f"Failed to list bucket {self.bucket_name}. "
                "Ensure credentials are configured correctly."
            ) from e
        return records

    def save(self, local_path: Path) -> FileRecord:
        """Upload a single file, keyed by its file name."""
        local_path = Path(local_path)
        if not local_path.is_file():
            raise StoreError(f"Not a file: {local_path}")

        key = local_path.name
        try:
            with open(local_path, "rb") as body:
                put_result = self.client.put_object(Bucket=self.bucket_name, Key=key, Body=body)
            head = self.client.head_object(Bucket=self.bucket_name, Key=key)
        except OSError as e:
            raise StoreError(f"Failed to read {local_path}: {e}") from e
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {e}")
            raise StoreError(f"Failed to save S3 object {key}. Check your credentials.") from e

        modified_at = head.get("LastModified") or datetime.now(timezone.utc)
        version = put_result.get("VersionId") or head.get("VersionId")
        return FileRecord(
            name=key,
            path=str(local_path.resolve()),
            size=head.get("ContentLength", local_path.stat().st_size),
            modified_at=modified_at,
            checksum=_normalize_etag(put_result.get("ETag") or head.get("ETag")),
            version=version,
            container_name=self.bucket_name,
        )

    def save_all(self, local_dir: Path) -> List[FileRecord]:
        """Upload every regular file directly inside ``local_dir``."""
        local_dir = Path(local_dir)
        if not local_dir.is_dir():
            raise StoreError(f"Not a directory: {local_dir}")
        return [self.save(f) for f in sorted(local_dir.iterdir()) if f.is_file()]

    def delete(self, record: FileRecord) -> None:
        """Delete an object; records without a name are ignored."""
        if record is None or not record.name:
            return
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=record.name)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete {record.name} from bucket {self.bucket_name}: {e}")
            raise StoreError(f"Failed to remove S3 object {record.name}. Check your credentials.") from e

    def _summary_to_record(self, obj: dict) -> FileRecord:
        return FileRecord(
            name=obj["Key"],
            size=obj.get("Size", 0),
            modified_at=obj.get("LastModified"),
            checksum=_normalize_etag(obj.get("ETag")),
            container_name=self.bucket_name,
        )
