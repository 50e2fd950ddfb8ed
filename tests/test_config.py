"""
Tests for configuration loading and persistence.
"""

from pathlib import Path

import yaml

from bucketsync.config import Config, StoreBackend
from bucketsync.sync.local_file_adapter import LocalDirectoryStore
from bucketsync.sync.s3_adapter import S3Store
from bucketsync.sync.store_factory import create_remote_store


def test_defaults(tmp_path):
    config = Config(storage_path=tmp_path)

    assert config.store_backend == StoreBackend.LOCAL
    assert config.sqlite_path == tmp_path / "sqlite" / "bucketsync.db"
    assert config.resolved_store_path == tmp_path / "remote"
    assert config.connect_timeout == 5
    assert config.read_timeout == 30


def test_load_missing_file_gives_defaults(tmp_path):
    config = Config.load(tmp_path / "absent.yaml")

    assert config.store_backend == StoreBackend.LOCAL
    assert config.bucket_name is None


def test_save_then_load(tmp_path):
    config = Config(
        storage_path=tmp_path / "home",
        store_backend=StoreBackend.S3,
        bucket_name="media",
        region="eu-west-1",
    )

    path = config.save(tmp_path / "config.yaml")
    loaded = Config.load(path)

    assert loaded.store_backend == StoreBackend.S3
    assert loaded.bucket_name == "media"
    assert loaded.region == "eu-west-1"
    assert loaded.storage_path == tmp_path / "home"


def test_save_defaults_to_storage_path(tmp_path):
    config = Config(storage_path=tmp_path / "home")

    path = config.save()

    assert path == tmp_path / "home" / "config.yaml"
    assert yaml.safe_load(path.read_text())["store_backend"] == "local"


def test_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv("BUCKETSYNC_BUCKET_NAME", "from-env")

    assert Config(storage_path=tmp_path).bucket_name == "from-env"


def test_ensure_directories(tmp_path):
    config = Config(storage_path=tmp_path / "home", store_path=tmp_path / "drive")

    config.ensure_directories()

    assert config.sqlite_path.parent.is_dir()
    assert config.logs_path.is_dir()
    assert Path(tmp_path / "drive").is_dir()


def test_factory_builds_local_store(tmp_path):
    store = create_remote_store(Config(storage_path=tmp_path, store_path=tmp_path / "drive"))

    assert isinstance(store, LocalDirectoryStore)
    assert store.root == (tmp_path / "drive").resolve()


def test_factory_builds_s3_store(tmp_path):
    config = Config(
        storage_path=tmp_path,
        store_backend=StoreBackend.S3,
        bucket_name="media",
        endpoint_url="http://localhost:9000",
    )

    store = create_remote_store(config)

    assert isinstance(store, S3Store)
    assert store.bucket_name == "media"
