"""Filesystem blob storage backend for testing."""

import hashlib
import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from ..errors import BackendError, BackendNotFoundError

logger = logging.getLogger(__name__)


class FilesystemBlobService:
    """
    Local filesystem backend for unit tests and offline use (avoids Azurite
    dependency).

    Blobs are stored as base_dir/<container>/<name>.
    """

    def __init__(self, base_dir: Path):
        """
        Initialize filesystem backend.

        Args:
            base_dir: Base directory holding one subdirectory per container
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _blob_path(self, container: str, name: str) -> Path:
        container_dir = (self.base_dir / container).resolve()
        dest = (container_dir / name).resolve()
        if container_dir not in dest.parents:
            raise BackendError(f"Blob name escapes container: {container}/{name}")
        return dest

    def create_blob_from_path(
        self, container: str, name: str, path: Path, content_type: str
    ) -> Dict[str, Any]:
        """
        Copy a local file into the store.

        Args:
            container: Container directory name
            name: Blob name
            path: Source file path
            content_type: MIME type (not stored on disk)

        Returns:
            Mapping with a double-quoted content-hash ``etag``
        """
        dest = self._blob_path(container, name)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, dest)

        digest = hashlib.md5(dest.read_bytes()).hexdigest()
        logger.debug("Stored %s/%s (%s)", container, name, content_type)
        return {"etag": f'"{digest}"'}

    def get_url(self, container: str, name: str) -> str:
        """
        file:// URL of a blob.

        Args:
            container: Container directory name
            name: Blob name

        Returns:
            Absolute file URI
        """
        return self._blob_path(container, name).as_uri()

    def delete_blob(self, container: str, name: str) -> None:
        """
        Delete a blob file.

        Args:
            container: Container directory name
            name: Blob name

        Raises:
            BackendNotFoundError: If the blob does not exist
        """
        dest = self._blob_path(container, name)
        if not dest.exists():
            raise BackendNotFoundError(container, name)
        dest.unlink()
