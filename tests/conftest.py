"""Shared test fixtures and utilities."""

from unittest.mock import Mock

import pytest

from keystone_azure.adapter import StorageAdapter
from keystone_azure.constants import (
    ENV_ACCESS_KEY,
    ENV_ACCOUNT,
    ENV_CONNECTION_STRING,
    ENV_CONTAINER,
)
from keystone_azure.storage_models import FileRecord


@pytest.fixture(autouse=True)
def clean_azure_env(monkeypatch):
    """Keep developer credentials out of the tests."""
    for name in (ENV_CONNECTION_STRING, ENV_ACCOUNT, ENV_ACCESS_KEY, ENV_CONTAINER):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def blob_service():
    """Mock backend echoing a fixed etag."""
    service = Mock()
    service.create_blob_from_path.return_value = {"etag": '"abc123"'}
    service.get_url.side_effect = lambda container, name: f"https://acct.blob.core.windows.net/{container}/{name}"
    service.delete_blob.return_value = None
    return service


@pytest.fixture
def make_adapter(blob_service):
    """Factory fixture for adapters backed by the mock service."""
    def _make(container: str = "media", schema=None, **azure_options):
        options = {"azure": {"container": container, **azure_options}}
        return StorageAdapter(options, schema, blob_service=blob_service, environ={})
    return _make


@pytest.fixture
def upload_file(tmp_path):
    """A temp upload as the host storage layer hands it over."""
    path = tmp_path / "upload_1"
    path.write_bytes(b"\xff\xd8\xff fake jpeg")
    return FileRecord(path=path, mimetype="image/jpeg", originalname="Photo.JPG", size=14)
