"""Constants for blob-facade."""

# Public Azure cloud blob endpoint, projected as https://{account}.{suffix}
DEFAULT_ENDPOINT_SUFFIX = "blob.core.windows.net"

# Scope requested when the service must read a copy source on our behalf
STORAGE_TOKEN_SCOPE = "https://storage.azure.com/.default"

# Containers fetched per page by list_containers
DEFAULT_PAGE_SIZE = 20

# Project marker directory and configuration file (inside FACADE_DIR)
FACADE_DIR = ".blob-facade"
CONFIG_FILE = "config.yaml"

# Environment overrides read by the config layer
ACCOUNT_ENV_VAR = "BLOB_FACADE_ACCOUNT"
CONTAINER_ENV_VAR = "BLOB_FACADE_CONTAINER"

# Version
FACADE_VERSION = "0.1.0"
