"""Base protocol for blob storage backends."""

from pathlib import Path
from typing import Any, Dict, Protocol


class BlobService(Protocol):
    """
    Protocol for the backend primitives the storage adapter relies on.

    Each method is a single request to the service. Implementations raise
    errors from the BackendError family and never retry.
    """

    def create_blob_from_path(
        self, container: str, name: str, path: Path, content_type: str
    ) -> Dict[str, Any]:
        """
        Upload a local file as a blob, replacing any existing blob.

        Args:
            container: Container name
            name: Blob name (storage key)
            path: Local file to read the content from
            content_type: MIME type stored with the blob

        Returns:
            Result mapping with at least ``etag``
        """
        ...

    def get_url(self, container: str, name: str) -> str:
        """
        Build the public URL of a blob without contacting the service.

        Args:
            container: Container name
            name: Blob name

        Returns:
            Canonical URL of the blob
        """
        ...

    def delete_blob(self, container: str, name: str) -> None:
        """
        Delete a blob.

        Args:
            container: Container name
            name: Blob name
        """
        ...
