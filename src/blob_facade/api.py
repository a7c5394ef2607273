"""Stable API for blob-facade operations.

This module is the surface external code imports. Each coroutine takes
named, defaulted parameters and returns a :class:`~blob_facade.result.Result`;
none of them raise.

Example:
    >>> from blob_facade import api
    >>> result = await api.write(account="acct", container="c1",
    ...                          filename="x.json", content="{}")
    >>> if result.err:
    ...     print(f"Upload failed: {result.err}")
    >>> (await api.read(account="acct", container="c1", filename="x.json")).data
    '{}'

Callers that need a different connector (sovereign cloud, test double)
should build a :class:`~blob_facade.facade.BlobFacade` directly.
"""

from typing import List, Optional, Tuple

from .constants import DEFAULT_PAGE_SIZE
from .facade import BlobFacade
from .result import Result
from .storage_models import BlobEntry, ContainerEntry, CopyResult, DeleteResult


def get_facade() -> BlobFacade:
    """Facade using ambient Azure identity against the public cloud."""
    return BlobFacade()


async def read(account: str = "", container: str = "", filename: str = "") -> Result[str]:
    """Return the blob's content as UTF-8 text."""
    return await get_facade().read(account=account, container=container, filename=filename)


async def write(
    account: str = "",
    container: str = "",
    filename: str = "",
    content: str = "",
) -> Result[str]:
    """Upload UTF-8 text, overwriting; data is the upload's request id."""
    return await get_facade().write(
        account=account, container=container, filename=filename, content=content
    )


async def copy(
    account: str = "",
    container: str = "",
    filename: str = "",
    destination: str = "",
) -> Result[CopyResult]:
    """Copy ``filename`` to ``destination/filename`` in the same container."""
    return await get_facade().copy(
        account=account, container=container, filename=filename, destination=destination
    )


async def move(
    account: str = "",
    container: str = "",
    filename: str = "",
    destination: str = "",
    compensate: Optional[bool] = None,
) -> Result[Tuple[CopyResult, DeleteResult]]:
    """Copy then delete the original; data is (copy result, delete result)."""
    return await get_facade().move(
        account=account,
        container=container,
        filename=filename,
        destination=destination,
        compensate=compensate,
    )


async def delete(account: str = "", container: str = "", filename: str = "") -> Result[DeleteResult]:
    """Delete a blob."""
    return await get_facade().delete(account=account, container=container, filename=filename)


async def list_containers(
    account: str = "",
    container: str = "",
    max_page_size: int = DEFAULT_PAGE_SIZE,
) -> Result[List[ContainerEntry]]:
    """List every container in the account."""
    return await get_facade().list_containers(
        account=account, container=container, max_page_size=max_page_size
    )


async def list_files(account: str = "", container: str = "") -> Result[List[BlobEntry]]:
    """List every blob in the container with full metadata."""
    return await get_facade().list_files(account=account, container=container)


async def list_files_by_name(account: str = "", container: str = "") -> Result[List[str]]:
    """List every blob name in the container."""
    return await get_facade().list_files_by_name(account=account, container=container)
