"""Azure blob storage backend."""

import contextlib
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.storage.blob import BlobServiceClient, ContentSettings

from ..config import AdapterConfig
from ..constants import DEFAULT_ENDPOINT_SUFFIX
from ..errors import (
    BackendAuthError,
    BackendError,
    BackendNetworkError,
    BackendNotFoundError,
)

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _azure_errors(container: str, name: str) -> Iterator[None]:
    """Translate Azure SDK exceptions into the BackendError family."""
    try:
        yield
    except ResourceNotFoundError as e:
        raise BackendNotFoundError(container, name) from e
    except ClientAuthenticationError as e:
        raise BackendAuthError(f"Authentication failed for {container}/{name}: {e.message}") from e
    except (ServiceRequestError, ServiceResponseError) as e:
        raise BackendNetworkError(f"Cannot reach blob service for {container}/{name}: {e}") from e
    except HttpResponseError as e:
        if e.status_code in (401, 403):
            raise BackendAuthError(
                f"Access denied to {container}/{name} ({e.status_code}): {e.message}"
            ) from e
        raise BackendError(f"Blob service error for {container}/{name}: {e.message}") from e
    except AzureError as e:
        raise BackendError(f"Blob service error for {container}/{name}: {e}") from e


class AzureBlobService:
    """
    Azure Blob Storage backend client.

    Never creates containers: the container and its access policy must be set
    up out-of-band (portal, CLI or infrastructure code).
    """

    def __init__(
        self,
        account_name: Optional[str] = None,
        account_key: Optional[str] = None,
        connection_string: Optional[str] = None,
        host: Optional[str] = None,
    ):
        """
        Initialize the Azure blob service client.

        An account name takes precedence over a connection string. With
        neither, a client is only built if ``host`` names an account URL;
        otherwise every call fails with BackendAuthError.

        Args:
            account_name: Storage account name
            account_key: Shared key for the account
            connection_string: Azure Storage connection string
            host: Account URL override (e.g. an Azurite endpoint)
        """
        self.client: Optional[BlobServiceClient] = None

        if account_name:
            account_url = host or f"https://{account_name}.{DEFAULT_ENDPOINT_SUFFIX}"
            credential = None
            if account_key:
                credential = {"account_name": account_name, "account_key": account_key}
            logger.debug("Creating blob client for account %s at %s", account_name, account_url)
            self.client = BlobServiceClient(account_url=account_url, credential=credential)
        elif connection_string:
            if host:
                logger.warning("Ignoring host %s: connection string defines the endpoint", host)
            logger.debug("Creating blob client from connection string")
            self.client = BlobServiceClient.from_connection_string(connection_string)
        elif host:
            logger.debug("Creating anonymous blob client at %s", host)
            self.client = BlobServiceClient(account_url=host)
        else:
            logger.debug("No Azure storage credentials available, blob client not created")

    @classmethod
    def from_config(cls, config: AdapterConfig) -> "AzureBlobService":
        """Build the service from a resolved adapter config."""
        return cls(
            account_name=config.account_name,
            account_key=config.account_key,
            connection_string=config.connection_string,
            host=config.host,
        )

    def _require_client(self) -> BlobServiceClient:
        if self.client is None:
            raise BackendAuthError(
                "No Azure storage credentials configured. Set azure.account_name, "
                "azure.connection_string or AZURE_STORAGE_CONNECTION_STRING."
            )
        return self.client

    def create_blob_from_path(
        self, container: str, name: str, path: Path, content_type: str
    ) -> Dict[str, Any]:
        """
        Upload a local file as a block blob.

        Args:
            container: Container name
            name: Blob name
            path: Source file path
            content_type: MIME type stored with the blob

        Returns:
            Mapping with ``etag`` and ``last_modified``
        """
        blob_client = self._require_client().get_blob_client(container=container, blob=name)

        with _azure_errors(container, name), open(path, "rb") as f:
            result = blob_client.upload_blob(
                f,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )

        return {"etag": result.get("etag"), "last_modified": result.get("last_modified")}

    def get_url(self, container: str, name: str) -> str:
        """
        Public URL of a blob. Only works for fetching if the container is public
        or access has been granted out-of-band.

        Args:
            container: Container name
            name: Blob name

        Returns:
            https URL of the blob
        """
        return self._require_client().get_blob_client(container=container, blob=name).url

    def delete_blob(self, container: str, name: str) -> None:
        """
        Delete a blob.

        Args:
            container: Container name
            name: Blob name
        """
        blob_client = self._require_client().get_blob_client(container=container, blob=name)
        with _azure_errors(container, name):
            blob_client.delete_blob()
