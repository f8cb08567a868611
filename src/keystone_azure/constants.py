"""Constants for keystone-azure."""

# Environment variables read by the configuration resolution step
ENV_CONNECTION_STRING = "AZURE_STORAGE_CONNECTION_STRING"
ENV_ACCOUNT = "AZURE_STORAGE_ACCOUNT"
ENV_ACCESS_KEY = "AZURE_STORAGE_ACCESS_KEY"
ENV_CONTAINER = "AZURE_STORAGE_CONTAINER"

# Public blob endpoint used when no host override is given
DEFAULT_ENDPOINT_SUFFIX = "blob.core.windows.net"

# Providers
PROVIDER_AZURE = "azure"

# Storage adapter API level expected by the host storage layer
COMPATIBILITY_LEVEL = 1

# Version
PACKAGE_VERSION = "0.1.0"
