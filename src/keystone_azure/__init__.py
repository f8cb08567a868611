"""Azure blob storage adapter for CMS file storage."""

from .adapter import StorageAdapter
from .constants import PACKAGE_VERSION
from .config import AdapterConfig, load_options, resolve_config
from .errors import (
    BackendError,
    ConfigurationError,
    FilenameGenerationError,
    StorageAdapterError,
)
from .storage_models import FileRecord

__version__ = PACKAGE_VERSION

__all__ = [
    "AdapterConfig",
    "BackendError",
    "ConfigurationError",
    "FileRecord",
    "FilenameGenerationError",
    "StorageAdapter",
    "StorageAdapterError",
    "load_options",
    "resolve_config",
]
