"""In-memory stand-ins for the async Azure Blob SDK surface the facade uses.

Only the calls made by blob_facade are modelled. Failures are raised as
the real azure.core exception types so error translation is exercised.
"""

import uuid
import urllib.parse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Dict, List, Optional, Set, Tuple

from azure.core.credentials import AccessToken
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from blob_facade.storage import StorageSession, get_storage_base_url


def _now() -> datetime:
    return datetime(2025, 1, 15, 10, 30, 45, tzinfo=timezone.utc)


class FakeStore:
    """Blob contents keyed by (container, name), plus failure switches."""

    def __init__(self, account: str = "acct"):
        self.account = account
        self.account_url = get_storage_base_url(account)
        self.containers: Set[str] = set()
        self.blobs: Dict[Tuple[str, str], bytes] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.copy_kwargs: List[dict] = []
        self.page_sizes: List[Optional[int]] = []
        # Failure switches
        self.fail_delete: Set[Tuple[str, str]] = set()
        self.omit_request_id = False

    def create_container(self, name: str) -> None:
        self.containers.add(name)

    def put(self, container: str, name: str, text: str) -> None:
        self.containers.add(container)
        self.blobs[(container, name)] = text.encode("utf-8")

    def text(self, container: str, name: str) -> str:
        return self.blobs[(container, name)].decode("utf-8")

    def require_container(self, container: str) -> None:
        if container not in self.containers:
            raise ResourceNotFoundError(message="The specified container does not exist.")

    def require_blob(self, container: str, name: str) -> None:
        self.require_container(container)
        if (container, name) not in self.blobs:
            raise ResourceNotFoundError(message="The specified blob does not exist.")

    def parse_source(self, url: str) -> Tuple[str, str]:
        assert url.startswith(self.account_url + "/"), f"foreign source {url}"
        container, _, name = url[len(self.account_url) + 1:].partition("/")
        return container, urllib.parse.unquote(name)


class FakeDownloader:
    def __init__(self, data: bytes, encoding: Optional[str]):
        self._data = data
        self._encoding = encoding

    async def readall(self):
        if self._encoding:
            return self._data.decode(self._encoding)
        return self._data


class FakeBlobClient:
    def __init__(self, store: FakeStore, container: str, name: str):
        self.store = store
        self.container = container
        self.name = name

    @property
    def key(self) -> Tuple[str, str]:
        return (self.container, self.name)

    async def download_blob(self, encoding: Optional[str] = None):
        self.store.calls.append(("download", self.container, self.name))
        self.store.require_blob(self.container, self.name)
        return FakeDownloader(self.store.blobs[self.key], encoding)

    async def upload_blob(self, data, overwrite: bool = False, length: Optional[int] = None):
        self.store.calls.append(("upload", self.container, self.name))
        self.store.require_container(self.container)
        assert overwrite, "facade must overwrite"
        assert length == len(data)
        self.store.blobs[self.key] = bytes(data)
        response = {"etag": '"0x8DC"', "last_modified": _now()}
        if not self.store.omit_request_id:
            response["request_id"] = str(uuid.uuid4())
        return response

    async def start_copy_from_url(self, source_url: str, **kwargs):
        self.store.calls.append(("copy", self.container, self.name))
        self.store.copy_kwargs.append(dict(kwargs, source_url=source_url))
        src_container, src_name = self.store.parse_source(source_url)
        self.store.require_container(self.container)
        self.store.require_blob(src_container, src_name)
        self.store.blobs[self.key] = self.store.blobs[(src_container, src_name)]
        return {
            "copy_id": str(uuid.uuid4()),
            "copy_status": "success",
            "request_id": str(uuid.uuid4()),
            "etag": '"0x8DD"',
            "last_modified": _now(),
        }

    async def delete_blob(self, raw_response_hook=None):
        self.store.calls.append(("delete", self.container, self.name))
        self.store.require_blob(self.container, self.name)
        if self.key in self.store.fail_delete:
            error = HttpResponseError(
                message="There is currently a lease on the blob and no lease ID was specified."
            )
            error.status_code = 412
            error.error_code = "LeaseIdMissing"
            raise error
        del self.store.blobs[self.key]
        if raw_response_hook:
            headers = {
                "x-ms-request-id": str(uuid.uuid4()),
                "x-ms-version": "2023-11-03",
                "Date": "Wed, 15 Jan 2025 10:30:45 GMT",
            }
            raw_response_hook(SimpleNamespace(http_response=SimpleNamespace(headers=headers)))


class FakePaged:
    """Mimics AsyncItemPaged: iterate items directly or page by page."""

    def __init__(self, load, page_size: Optional[int] = None):
        self._load = load
        self._page_size = page_size

    def __aiter__(self):
        return self._items()

    async def _items(self):
        for item in self._load():
            yield item

    def by_page(self):
        return self._pages()

    async def _pages(self):
        items = list(self._load())
        size = self._page_size or len(items) or 1
        for start in range(0, len(items), size):
            yield _aiter(items[start:start + size])


async def _aiter(items):
    for item in items:
        yield item


class FakeContainerClient:
    def __init__(self, store: FakeStore, name: str):
        self.store = store
        self.name = name

    def get_blob_client(self, blob: str) -> FakeBlobClient:
        return FakeBlobClient(self.store, self.name, blob)

    def list_blobs(self) -> FakePaged:
        def load():
            self.store.calls.append(("list_blobs", self.name))
            self.store.require_container(self.name)
            for (container, name), data in sorted(self.store.blobs.items()):
                if container != self.name:
                    continue
                yield SimpleNamespace(
                    name=name,
                    container=container,
                    size=len(data),
                    content_settings=SimpleNamespace(content_type="application/octet-stream"),
                    etag='"0x8DC"',
                    last_modified=_now(),
                    creation_time=_now(),
                    blob_type="BlockBlob",
                    blob_tier="Hot",
                    metadata={},
                )
        return FakePaged(load)


class FakeServiceClient:
    def __init__(self, store: FakeStore, account_url: Optional[str] = None, credential=None):
        self.store = store
        self.url = account_url
        self.credential = credential
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True

    def get_container_client(self, container: str) -> FakeContainerClient:
        return FakeContainerClient(self.store, container)

    def list_containers(self, results_per_page: Optional[int] = None) -> FakePaged:
        self.store.page_sizes.append(results_per_page)

        def load():
            self.store.calls.append(("list_containers",))
            for name in sorted(self.store.containers):
                yield SimpleNamespace(
                    name=name,
                    last_modified=_now(),
                    etag='"0x8DA"',
                    public_access=None,
                    metadata={"owner": "tests"},
                )
        return FakePaged(load, results_per_page)


class FakeCredential:
    """Async TokenCredential that hands out a fixed token."""

    def __init__(self, token: str = "fake-token"):
        self.token = token
        self.scopes: List[str] = []
        self.closed = False

    async def get_token(self, *scopes, **kwargs) -> AccessToken:
        self.scopes.extend(scopes)
        return AccessToken(self.token, 4102444800)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True


class FakeConnector:
    """Connector yielding sessions over a FakeStore."""

    def __init__(self, store: FakeStore, credential: Optional[FakeCredential] = None):
        self.store = store
        self.credential = credential
        self.accounts: List[str] = []

    @asynccontextmanager
    async def connect(self, account: str):
        self.accounts.append(account)
        yield StorageSession(
            account_url=get_storage_base_url(account),
            service=FakeServiceClient(self.store),
            credential=self.credential,
        )


class ExplodingConnector:
    """Connector that records and rejects every connection attempt."""

    def __init__(self):
        self.attempts = 0

    def connect(self, account: str):
        self.attempts += 1
        raise AssertionError(f"remote call attempted for account {account!r}")
