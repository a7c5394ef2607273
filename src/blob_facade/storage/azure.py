"""Azure blob storage connector."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import BlobServiceClient

from ..constants import DEFAULT_ENDPOINT_SUFFIX
from .base import StorageSession

logger = logging.getLogger(__name__)


def get_storage_base_url(account: str, endpoint_suffix: str = DEFAULT_ENDPOINT_SUFFIX) -> str:
    """
    Project an account name onto its blob endpoint.

    Args:
        account: Storage account name
        endpoint_suffix: Cloud-specific blob endpoint suffix

    Returns:
        Base URL such as https://myaccount.blob.core.windows.net
    """
    return f"https://{account}.{endpoint_suffix}"


class AzureConnector:
    """
    Opens Azure Blob Storage sessions authenticated with ambient identity.

    A fresh credential and service client are created for every session
    and closed when it ends; nothing is pooled across operations.
    """

    def __init__(
        self,
        endpoint_suffix: str = DEFAULT_ENDPOINT_SUFFIX,
        credential_factory: Optional[Callable[[], object]] = None,
        client_factory: Optional[Callable[..., object]] = None,
    ):
        """
        Initialize Azure connector.

        Args:
            endpoint_suffix: Blob endpoint suffix (sovereign clouds differ)
            credential_factory: Builds an async credential, DefaultAzureCredential by default
            client_factory: Builds the service client from (account_url, credential=...)
        """
        self.endpoint_suffix = endpoint_suffix
        self.credential_factory = credential_factory or DefaultAzureCredential
        self.client_factory = client_factory or BlobServiceClient

    def account_url(self, account: str) -> str:
        return get_storage_base_url(account, self.endpoint_suffix)

    @asynccontextmanager
    async def connect(self, account: str) -> AsyncIterator[StorageSession]:
        """
        Authenticate and connect to the account's blob endpoint.

        Args:
            account: Storage account name

        Yields:
            StorageSession bound to the account
        """
        account_url = self.account_url(account)
        logger.debug("Connecting to %s", account_url)

        credential = self.credential_factory()
        async with credential:
            async with self.client_factory(account_url, credential=credential) as service:
                yield StorageSession(
                    account_url=account_url,
                    service=service,
                    credential=credential,
                )
