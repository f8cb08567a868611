"""Blob storage backends for the Azure storage adapter."""

from .azure import AzureBlobService
from .base import BlobService
from .factory import make_blob_service
from .fs import FilesystemBlobService

__all__ = ["AzureBlobService", "BlobService", "FilesystemBlobService", "make_blob_service"]
