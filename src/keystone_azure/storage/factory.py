"""Factory for creating blob storage backends."""

from ..config import AdapterConfig
from ..constants import PROVIDER_AZURE
from ..errors import ConfigurationError
from .azure import AzureBlobService
from .base import BlobService
from .fs import FilesystemBlobService


def make_blob_service(config: AdapterConfig) -> BlobService:
    """
    Create the backend client for a resolved configuration.

    The provider itself is validated by AdapterConfig ("azure" or "fs").

    Args:
        config: Adapter configuration

    Returns:
        BlobService instance

    Raises:
        ConfigurationError: If the fs provider has no root directory
    """
    if config.provider == PROVIDER_AZURE:
        return AzureBlobService.from_config(config)

    if not config.root:
        raise ConfigurationError("azure.root (directory path) required for filesystem storage")
    return FilesystemBlobService(config.root)
