"""Adapter configuration and its resolution from options and environment."""

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, MutableMapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import PROVIDER_AZURE
from .env_manager import apply_container_fallback, read_env_credentials
from .errors import ConfigurationError, MissingContainerError

logger = logging.getLogger(__name__)

_SECRET_FIELDS = ("account_key", "connection_string")


class AdapterConfig(BaseModel):
    """
    Immutable Azure adapter configuration.

    Field names follow Python conventions but the camelCase spelling used by
    existing options bags (``accountName``, ``connectionString``...) is
    accepted too.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    account_name: Optional[str] = Field(None, alias="accountName")
    account_key: Optional[str] = Field(None, alias="accountKey")
    connection_string: Optional[str] = Field(None, alias="connectionString")
    host: Optional[str] = None                 # Endpoint override (account URL)
    container: str = Field(..., min_length=1)

    provider: Literal["azure", "fs"] = PROVIDER_AZURE
    root: Optional[Path] = None                # Base directory for provider "fs"
    url_prefers_file_container: bool = Field(False, alias="urlPrefersFileContainer")

    # Which precedence step supplied the credentials
    credential_source: Literal["explicit", "environment", "ambient"] = "ambient"

    @property
    def has_credentials(self) -> bool:
        """Check if any credentials were resolved."""
        return bool(self.account_name or self.connection_string)

    def masked(self) -> Dict[str, Any]:
        """Dump the config with secrets replaced, for display."""
        data = self.model_dump()
        for name in _SECRET_FIELDS:
            if data.get(name):
                data[name] = "****"
        return data


def resolve_config(
    options: MutableMapping[str, Any],
    environ: Optional[Mapping[str, str]] = None
) -> AdapterConfig:
    """
    Resolve adapter configuration from an options bag and the environment.

    Credentials precedence: explicit (``options['azure']`` names an account or
    a connection string) > environment variables > ambient (none; the backend
    client decides what to do). The environment step never looks at the
    options bag.

    The generic ``options['container']`` is filled from AZURE_STORAGE_CONTAINER
    when unset, but only ``options['azure']['container']`` is validated.

    Args:
        options: Generic options bag; Azure settings live under ``azure``
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AdapterConfig

    Raises:
        MissingContainerError: If ``options['azure']['container']`` is unset
        ConfigurationError: If any other setting is invalid
    """
    azure_options: Dict[str, Any] = dict(options.get("azure") or {})
    azure_options.pop("credential_source", None)

    # Account name first, connection string as the alternative
    explicit = (
        azure_options.get("account_name") or azure_options.get("accountName")
        or azure_options.get("connection_string") or azure_options.get("connectionString")
    )

    if explicit:
        source = "explicit"
        creds: Dict[str, Any] = {}
    else:
        # The client comes from the environment alone: a key or host left in
        # the options bag must never be paired with environment credentials
        for name in ("account_key", "accountKey", "connection_string", "connectionString",
                     "account_name", "accountName", "host"):
            azure_options.pop(name, None)
        creds = read_env_credentials(environ)
        source = "environment" if creds else "ambient"

    apply_container_fallback(options, environ)

    if not azure_options.get("container"):
        raise MissingContainerError()

    try:
        config = AdapterConfig(**azure_options, **creds, credential_source=source)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Azure storage configuration: {e}") from e

    logger.debug(
        "Resolved storage config: provider=%s container=%s credentials=%s",
        config.provider, config.container, source
    )
    return config


def load_options(path: Path) -> Dict[str, Any]:
    """Load an options bag from a YAML file.

    Args:
        path: YAML file path

    Returns:
        Options mapping; empty if the file does not exist

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    path = Path(path)
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")
    return data
