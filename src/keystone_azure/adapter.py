"""Azure blob storage adapter for a CMS file-storage layer.

The host storage layer owns filenames and persistence. The adapter only maps a
file record onto three backend requests: upload a local file, build a public
URL, delete a blob.

Credentials come from ``options['azure']`` (an account name and key, or a
connection string) and otherwise from the AZURE_STORAGE_* environment
variables. The container is never created here; create it, and decide on its
access level, through the Azure portal or CLI.
"""

import logging
from typing import Any, Dict, Mapping, MutableMapping, Optional

from .config import AdapterConfig, resolve_config
from .constants import COMPATIBILITY_LEVEL
from .errors import ConfigurationError, UnstoredFileError
from .filenames import FilenameGenerator, random_filename
from .storage import BlobService, make_blob_service
from .storage_models import SCHEMA_FIELD_DEFAULTS, SCHEMA_TYPES, FileRecord

logger = logging.getLogger(__name__)


class StorageAdapter:
    """
    Stores host file records as blobs in an Azure storage container.

    Every operation is a single request to the backend: no retries, no caching,
    no state beyond the configuration and the backend client.
    """

    COMPATIBILITY_LEVEL = COMPATIBILITY_LEVEL
    SCHEMA_TYPES = SCHEMA_TYPES
    SCHEMA_FIELD_DEFAULTS = SCHEMA_FIELD_DEFAULTS

    def __init__(
        self,
        options: MutableMapping[str, Any],
        schema: Optional[Mapping[str, bool]] = None,
        *,
        blob_service: Optional[BlobService] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the adapter.

        Args:
            options: Generic options bag; Azure settings under ``azure``, an
                optional default ``generate_filename`` callable
            schema: Optional schema fields to persist, e.g. ``{"etag": True}``
            blob_service: Backend client to use instead of one built from config
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigurationError: If the container is missing or the schema is
                not a mapping or names fields the adapter does not write
        """
        self.options = options
        self.config: AdapterConfig = resolve_config(options, environ)
        self.container = self.config.container

        if schema is not None and not isinstance(schema, Mapping):
            raise ConfigurationError(
                f"Schema must be a mapping of field name to bool, got {type(schema).__name__}"
            )
        unknown = sorted(set(schema or {}) - set(SCHEMA_FIELD_DEFAULTS))
        if unknown:
            raise ConfigurationError(
                f"Unknown schema fields {unknown}; optional fields are "
                f"{sorted(SCHEMA_FIELD_DEFAULTS)}"
            )
        self.schema: Dict[str, bool] = {**SCHEMA_FIELD_DEFAULTS, **(schema or {})}

        self.generate_filename: FilenameGenerator = options.get("generate_filename") or random_filename
        self.blob_service = blob_service if blob_service is not None else make_blob_service(self.config)

    def store(
        self, file: FileRecord, generate_filename: Optional[FilenameGenerator] = None
    ) -> FileRecord:
        """
        Upload a file and return the record annotated with its storage location.

        The generator is called once with index 0 and must itself guarantee a
        unique name. Its errors, and the backend's, propagate unchanged. The
        record passed in is not modified.

        Args:
            file: Record with the local ``path`` and ``mimetype``
            generate_filename: Generator overriding the adapter default

        Returns:
            Copy of ``file`` with ``filename``, ``etag`` and ``container`` set
        """
        generate = generate_filename or self.generate_filename
        blob_name = generate(file, 0)

        logger.debug("Uploading file %s", blob_name)
        container = self.container
        result = self.blob_service.create_blob_from_path(
            container, blob_name, file.path, file.mimetype
        )
        logger.debug("File upload successful")

        # Recording the container per file means renaming the container
        # requires a data migration.
        return file.model_copy(update={
            "filename": blob_name,
            "etag": result["etag"],
            "container": container,
        })

    def resolve_url(self, file: FileRecord) -> str:
        """
        Public URL of a stored file.

        The URL is built locally. It only fetches the file if the container is
        public or access was granted out-of-band. The adapter's container is
        used unless ``url_prefers_file_container`` is set.
        """
        if not file.filename:
            raise UnstoredFileError("resolve the URL of")

        container = self.container
        if self.config.url_prefers_file_container and file.container:
            container = file.container
        return self.blob_service.get_url(container, file.filename)

    def remove(self, file: FileRecord) -> None:
        """
        Delete a stored file from the container recorded on it, falling back to
        the adapter's container. Backend errors propagate unchanged.
        """
        if not file.filename:
            raise UnstoredFileError("remove")

        container = file.container or self.container
        logger.debug("Removing file %s from %s", file.filename, container)
        self.blob_service.delete_blob(container, file.filename)

    def to_document(self, file: FileRecord) -> Dict[str, Optional[str]]:
        """Fields of a stored record the host should persist, per the schema."""
        doc: Dict[str, Optional[str]] = {"filename": file.filename}
        for name, enabled in self.schema.items():
            if enabled:
                doc[name] = getattr(file, name)
        return doc
