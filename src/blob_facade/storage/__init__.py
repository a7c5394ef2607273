"""Storage package: connectors that open authenticated blob sessions."""

from .azure import AzureConnector, get_storage_base_url
from .base import StorageConnector, StorageSession

__all__ = ["AzureConnector", "StorageConnector", "StorageSession", "get_storage_base_url"]
