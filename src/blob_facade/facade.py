"""Blob facade: validated, non-raising operations over one storage account.

Every public coroutine follows the same shape:

1. Check required parameters in a fixed order (account, container,
   filename, content, destination). The first missing one is returned as
   a MissingParameterError before any connection is opened.
2. Open a session through the connector and make one or two SDK calls.
3. Return ``Result.success(data)``, or ``Result.failure(err)`` with any
   exception translated by :func:`~blob_facade.errors.translate_error`.

Nothing is retried and nothing is raised to the caller.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .constants import DEFAULT_PAGE_SIZE
from .errors import (
    ConfirmationError,
    InvalidParameterError,
    MissingParameterError,
    ValidationError,
    translate_error,
)
from .result import Result
from .storage import AzureConnector, StorageConnector, StorageSession
from .storage_models import BlobEntry, ContainerEntry, CopyResult, DeleteResult

logger = logging.getLogger(__name__)


def first_missing(*fields: Tuple[str, Any]) -> Optional[ValidationError]:
    """Return an error for the first empty (name, value) pair, in order."""
    for name, value in fields:
        if not value:
            return MissingParameterError(name)
    return None


def normalize_destination(destination: Any) -> Tuple[Optional[str], Optional[ValidationError]]:
    """
    Validate a copy/move destination folder.

    Destination must be a non-empty path segment string. Sequences are
    rejected rather than joined; leading and trailing slashes are trimmed.

    Returns:
        (destination, None) when valid, (None, error) otherwise
    """
    if not destination:
        return None, MissingParameterError("destination")
    if not isinstance(destination, str):
        return None, InvalidParameterError(
            "destination",
            "Invalid `destination` parameter: expected a path segment string.",
        )
    destination = destination.strip("/")
    if not destination:
        return None, MissingParameterError("destination")
    return destination, None


class BlobFacade:
    """
    Read, write, copy, move, delete and list blobs in one storage account.

    The facade holds no per-account state; each call opens its own session
    through the connector and closes it before returning.
    """

    def __init__(
        self,
        connector: Optional[StorageConnector] = None,
        compensate_move: bool = False,
    ):
        """
        Initialize facade.

        Args:
            connector: Session source, AzureConnector by default
            compensate_move: Delete the copy when a move's delete step fails
        """
        self.connector = connector or AzureConnector()
        self.compensate_move = compensate_move

    async def read(
        self,
        account: str = "",
        container: str = "",
        filename: str = "",
    ) -> Result[str]:
        """Download a blob and return it decoded as UTF-8 text.

        The whole object is buffered in memory before returning.
        """
        error = first_missing(
            ("account", account), ("container", container), ("filename", filename)
        )
        if error:
            return Result.failure(error)

        logger.debug("Reading %s/%s from %s", container, filename, account)
        try:
            async with self.connector.connect(account) as session:
                blob = _blob_client(session, container, filename)
                downloader = await blob.download_blob(encoding="UTF-8")
                data = await downloader.readall()
        except Exception as exc:
            return _failure("read", exc)

        return Result.success(data)

    async def write(
        self,
        account: str = "",
        container: str = "",
        filename: str = "",
        content: str = "",
    ) -> Result[str]:
        """Upload UTF-8 text, overwriting any existing blob.

        Returns the service request id as confirmation. A successful upload
        without a request id is reported as a ConfirmationError.
        """
        error = first_missing(
            ("account", account),
            ("container", container),
            ("filename", filename),
            ("content", content),
        )
        if error:
            return Result.failure(error)
        if not isinstance(content, str):
            return Result.failure(InvalidParameterError(
                "content", "Invalid `content` parameter: expected UTF-8 text."
            ))

        logger.debug("Writing %s/%s to %s", container, filename, account)
        payload = content.encode("utf-8")
        try:
            async with self.connector.connect(account) as session:
                blob = _blob_client(session, container, filename)
                response = await blob.upload_blob(payload, overwrite=True, length=len(payload))
        except Exception as exc:
            return _failure("write", exc)

        request_id = (response or {}).get("request_id")
        if not request_id:
            return Result.failure(ConfirmationError(filename))
        return Result.success(request_id)

    async def copy(
        self,
        account: str = "",
        container: str = "",
        filename: str = "",
        destination: str = "",
    ) -> Result[CopyResult]:
        """Copy a blob into ``destination/filename`` within the same container.

        The copy runs server-side and synchronously; the source is untouched.
        """
        error = first_missing(
            ("account", account), ("container", container), ("filename", filename)
        )
        if error:
            return Result.failure(error)
        destination, error = normalize_destination(destination)
        if error:
            return Result.failure(error)

        logger.debug("Copying %s/%s to %s/%s", container, filename, container, destination)
        try:
            async with self.connector.connect(account) as session:
                copied = await _copy(session, container, filename, destination)
        except Exception as exc:
            return _failure("copy", exc)

        return Result.success(copied)

    async def move(
        self,
        account: str = "",
        container: str = "",
        filename: str = "",
        destination: str = "",
        compensate: Optional[bool] = None,
    ) -> Result[Tuple[CopyResult, DeleteResult]]:
        """Copy a blob into ``destination/filename``, then delete the original.

        If the delete fails the copy has already happened. Its error is
        returned and the copy stays behind as a duplicate unless
        compensation is on, in which case the copy is deleted first.

        Args:
            compensate: Override the facade's compensate_move for this call
        """
        error = first_missing(
            ("account", account), ("container", container), ("filename", filename)
        )
        if error:
            return Result.failure(error)
        destination, error = normalize_destination(destination)
        if error:
            return Result.failure(error)

        if compensate is None:
            compensate = self.compensate_move

        logger.debug("Moving %s/%s to %s/%s", container, filename, container, destination)
        try:
            async with self.connector.connect(account) as session:
                copied = await _copy(session, container, filename, destination)
                try:
                    deleted = await _delete(session, container, filename)
                except Exception:
                    target = "/".join([destination, filename])
                    if compensate:
                        await _remove_copy(session, container, target)
                    else:
                        logger.warning(
                            "Delete of %s/%s failed after copy; %s/%s left in place",
                            container, filename, container, target,
                        )
                    raise
        except Exception as exc:
            return _failure("move", exc)

        return Result.success((copied, deleted))

    async def delete(
        self,
        account: str = "",
        container: str = "",
        filename: str = "",
    ) -> Result[DeleteResult]:
        """Delete a blob. Deleting a missing blob returns a NotFoundError."""
        error = first_missing(
            ("account", account), ("container", container), ("filename", filename)
        )
        if error:
            return Result.failure(error)

        logger.debug("Deleting %s/%s from %s", container, filename, account)
        try:
            async with self.connector.connect(account) as session:
                deleted = await _delete(session, container, filename)
        except Exception as exc:
            return _failure("delete", exc)

        return Result.success(deleted)

    async def list_containers(
        self,
        account: str = "",
        container: str = "",
        max_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Result[List[ContainerEntry]]:
        """List every container in the account, fetched page by page."""
        error = first_missing(("account", account), ("container", container))
        if error:
            return Result.failure(error)

        logger.debug("Listing containers of %s (page size %d)", account, max_page_size)
        entries: List[ContainerEntry] = []
        try:
            async with self.connector.connect(account) as session:
                pages = session.service.list_containers(results_per_page=max_page_size).by_page()
                async for page in pages:
                    async for props in page:
                        entries.append(ContainerEntry.from_properties(props))
        except Exception as exc:
            return _failure("list_containers", exc)

        return Result.success(entries)

    async def list_files(
        self,
        account: str = "",
        container: str = "",
    ) -> Result[List[BlobEntry]]:
        """List every blob in the container (flat listing, full metadata)."""
        error = first_missing(("account", account), ("container", container))
        if error:
            return Result.failure(error)

        logger.debug("Listing blobs in %s/%s", account, container)
        entries: List[BlobEntry] = []
        try:
            async with self.connector.connect(account) as session:
                async for props in session.service.get_container_client(container).list_blobs():
                    entries.append(BlobEntry.from_properties(props))
        except Exception as exc:
            return _failure("list_files", exc)

        return Result.success(entries)

    async def list_files_by_name(
        self,
        account: str = "",
        container: str = "",
    ) -> Result[List[str]]:
        """List the names of every blob in the container."""
        result = await self.list_files(account=account, container=container)
        if result.err:
            return Result.failure(result.err)
        return Result.success([entry.name for entry in result.data])


def _blob_client(session: StorageSession, container: str, blob: str):
    return session.service.get_container_client(container).get_blob_client(blob)


async def _copy(session: StorageSession, container: str, filename: str, destination: str) -> CopyResult:
    target = "/".join([destination, filename])
    source = session.blob_url(container, filename)

    kwargs: Dict[str, Any] = {"requires_sync": True}
    authorization = await session.source_authorization()
    if authorization:
        kwargs["source_authorization"] = authorization

    response = await _blob_client(session, container, target).start_copy_from_url(source, **kwargs)
    return CopyResult.from_response(response or {})


async def _delete(session: StorageSession, container: str, filename: str) -> DeleteResult:
    headers: Dict[str, str] = {}

    def capture(response):
        headers.update(response.http_response.headers)

    await _blob_client(session, container, filename).delete_blob(raw_response_hook=capture)
    return DeleteResult.from_headers(headers)


async def _remove_copy(session: StorageSession, container: str, target: str) -> None:
    """Best-effort removal of a move's copy; failures are logged only."""
    try:
        await _delete(session, container, target)
    except Exception as exc:
        logger.warning("Could not remove copy %s/%s after failed move: %s", container, target, exc)
    else:
        logger.info("Removed copy %s/%s after failed move", container, target)


def _failure(operation: str, exc: Exception) -> Result:
    error = translate_error(exc)
    logger.debug("%s failed: %s: %s", operation, type(error).__name__, error)
    return Result.failure(error)
