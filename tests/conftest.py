"""Shared test fixtures and utilities."""

import pytest

from blob_facade.facade import BlobFacade
from fakes import ExplodingConnector, FakeConnector, FakeCredential, FakeStore

ACCOUNT = "acct"
CONTAINER = "c1"


@pytest.fixture
def store():
    """Empty fake storage account with one container."""
    fake = FakeStore(ACCOUNT)
    fake.create_container(CONTAINER)
    return fake


@pytest.fixture
def credential():
    return FakeCredential()


@pytest.fixture
def connector(store, credential):
    return FakeConnector(store, credential)


@pytest.fixture
def facade(connector):
    """Facade wired to the fake store."""
    return BlobFacade(connector=connector)


@pytest.fixture
def exploding():
    """Connector that fails if any remote call is attempted."""
    return ExplodingConnector()


@pytest.fixture
def offline_facade(exploding):
    return BlobFacade(connector=exploding)


@pytest.fixture
def write_blob(store):
    """Factory fixture to seed blobs in the default container."""
    def _write(name: str, content: str = "test content", container: str = CONTAINER):
        store.put(container, name, content)
        return name
    return _write
