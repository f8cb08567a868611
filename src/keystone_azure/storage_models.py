"""File record model shared between the host storage layer and the adapter.

The host creates a FileRecord for every upload, the adapter returns it enriched
with the storage key, etag and container, and the host persists the fields the
schema enables (see ``SCHEMA_TYPES`` and ``SCHEMA_FIELD_DEFAULTS``).
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, field_validator


# Fields the adapter can write, and their stored type
SCHEMA_TYPES: Dict[str, type] = {
    "filename": str,
    "container": str,
    "etag": str,
}

# Optional fields are only persisted when the schema turns them on
SCHEMA_FIELD_DEFAULTS: Dict[str, bool] = {
    "container": False,
    "etag": False,
}


class FileRecord(BaseModel):
    """A file moving through the upload / url / delete lifecycle."""
    path: Optional[Path] = None           # Local temp file (upload source)
    mimetype: str = "application/octet-stream"
    originalname: Optional[str] = None    # Name the client uploaded
    size: Optional[int] = None            # Size in bytes, if known

    # Written by the adapter after a successful store
    filename: Optional[str] = None        # Storage key (blob name)
    etag: Optional[str] = None            # Double-quoted, as the backend returns it
    container: Optional[str] = None       # Container that stored the blob

    @field_validator("filename", "container", "etag")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from the database as unset."""
        return v or None
