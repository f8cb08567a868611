"""Environment-sourced credentials for keystone-azure.

The Azure storage tooling conventionally reads AZURE_STORAGE_CONNECTION_STRING,
or AZURE_STORAGE_ACCOUNT together with AZURE_STORAGE_ACCESS_KEY. This module
reads them explicitly, so the resolution order stays visible and testable
instead of happening inside the SDK.
"""
import os
from typing import Any, Dict, Mapping, MutableMapping, Optional

from .constants import (
    ENV_ACCESS_KEY,
    ENV_ACCOUNT,
    ENV_CONNECTION_STRING,
    ENV_CONTAINER,
)


def read_env_credentials(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Read storage credentials from the process environment.

    A connection string wins over an account name and key, matching the
    Azure tooling.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Dict with either ``connection_string`` or ``account_name`` (and
        ``account_key`` when set); empty when nothing is configured
    """
    env = os.environ if environ is None else environ

    conn_str = env.get(ENV_CONNECTION_STRING)
    if conn_str:
        return {"connection_string": conn_str}

    account = env.get(ENV_ACCOUNT)
    if account:
        creds = {"account_name": account}
        key = env.get(ENV_ACCESS_KEY)
        if key:
            creds["account_key"] = key
        return creds

    return {}


def apply_container_fallback(
    options: MutableMapping[str, Any],
    environ: Optional[Mapping[str, str]] = None
) -> None:
    """Fill the generic ``container`` option from AZURE_STORAGE_CONTAINER.

    Only the generic options bag is touched, never ``options['azure']``. The
    adapter validates the Azure-specific field, so this fallback alone does not
    satisfy the container requirement.

    Args:
        options: Generic options bag handed to the adapter
        environ: Environment mapping (defaults to os.environ)
    """
    env = os.environ if environ is None else environ
    if not options.get("container"):
        options["container"] = env.get(ENV_CONTAINER)
