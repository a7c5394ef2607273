"""Base protocol for storage connectors."""

import urllib.parse
from dataclasses import dataclass
from typing import Any, AsyncContextManager, Optional, Protocol

from ..constants import STORAGE_TOKEN_SCOPE


@dataclass
class StorageSession:
    """
    An authenticated connection to one storage account.

    Lives for the duration of a single facade operation; the connector
    closes the service client and credential when the session ends.
    """

    account_url: str
    service: Any        # azure.storage.blob.aio.BlobServiceClient or compatible
    credential: Any     # async TokenCredential, or None for anonymous access

    def blob_url(self, container: str, blob: str) -> str:
        """Fully qualified, percent-encoded URL of a blob in this account."""
        return "/".join([self.account_url, container, urllib.parse.quote(blob, safe="/")])

    async def source_authorization(self) -> Optional[str]:
        """
        Bearer value letting the service read a copy source on our behalf.

        Returns:
            "Bearer <token>" or None when the session has no credential
        """
        if self.credential is None:
            return None
        token = await self.credential.get_token(STORAGE_TOKEN_SCOPE)
        return f"Bearer {token.token}"


class StorageConnector(Protocol):
    """
    Protocol for opening storage sessions.

    Implementations own credential resolution and client construction;
    the facade only ever sees the resulting session.
    """

    def connect(self, account: str) -> AsyncContextManager[StorageSession]:
        """
        Open a session for a storage account.

        Args:
            account: Storage account name

        Returns:
            Async context manager yielding a StorageSession
        """
        ...
