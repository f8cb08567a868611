"""Custom exceptions for keystone-azure.

This module defines typed exceptions so the host storage layer can tell a
misconfigured adapter apart from a failing upload or a failing backend.
"""


class StorageAdapterError(RuntimeError):
    """Base class for all adapter-related errors."""
    pass


# Configuration Errors
class ConfigurationError(StorageAdapterError):
    """Adapter configuration is missing or invalid."""
    pass


class MissingContainerError(ConfigurationError):
    """No container configured for the adapter."""

    def __init__(self):
        super().__init__(
            "Azure storage configuration error: missing container setting. "
            "Set options['azure']['container'] to an existing storage container."
        )


# Filename Errors
class FilenameGenerationError(StorageAdapterError):
    """Filename generator could not produce a storage key."""
    pass


class UnstoredFileError(StorageAdapterError):
    """File record has no storage key, so there is no blob to address."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation} a file without a filename (storage key)")


# Backend Errors
class BackendError(StorageAdapterError):
    """Base class for blob storage service errors."""
    pass


class BackendNetworkError(BackendError):
    """Network connectivity issue with the storage service."""
    pass


class BackendAuthError(BackendError):
    """Authentication or authorization failed (401/403) or no credentials."""
    pass


class BackendNotFoundError(BackendError):
    """Container or blob not found (404)."""

    def __init__(self, container: str, name: str):
        self.container = container
        self.name = name
        super().__init__(f"Blob not found: {container}/{name}")
