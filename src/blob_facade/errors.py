"""Typed errors for blob-facade.

These exceptions are never raised across the public API. The facade
returns them as the ``err`` member of a :class:`~blob_facade.result.Result`
so callers can branch on the type instead of parsing messages.
"""

from typing import Optional

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)


MISSING_MESSAGES = {
    "account": "Missing `account` parameter.",
    "container": "Missing `container` parameter.",
    "content": "Missing `content` parameter.",
    "destination": "Missing `destination` parameter.",
    "filename": "Missing `filename` parameter.",
}


class FacadeError(RuntimeError):
    """Base class for all blob-facade errors."""
    pass


# Validation Errors
class ValidationError(FacadeError):
    """A request parameter failed validation before any remote call."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class MissingParameterError(ValidationError):
    """Required parameter missing or empty."""

    def __init__(self, field: str):
        super().__init__(field, MISSING_MESSAGES[field])


class InvalidParameterError(ValidationError):
    """Parameter present but of the wrong shape."""
    pass


# Confirmation Errors
class ConfirmationError(FacadeError):
    """Remote call succeeded but did not return the expected confirmation."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"Failed to confirm uploading of file, {filename} to blob storage. "
            f"No request id was returned. Try again."
        )


class DecodeError(FacadeError):
    """Blob content downloaded fine but is not valid UTF-8 text."""
    pass


# Remote Errors
class RemoteError(FacadeError):
    """Failure reported by the storage service or its transport."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class NotFoundError(RemoteError):
    """Blob or container not found (404)."""
    pass


class AuthError(RemoteError):
    """Authentication or authorization failed (401/403)."""
    pass


class NetworkError(RemoteError):
    """Request never got a usable response from the storage endpoint."""
    pass


def translate_error(exc: BaseException) -> FacadeError:
    """Map an exception raised by the storage SDK onto a FacadeError.

    The original exception is chained as ``__cause__`` so nothing the
    SDK attached (response, headers, continuation state) is lost.

    Args:
        exc: Exception raised while talking to the storage service

    Returns:
        FacadeError subclass matching the failure class
    """
    if isinstance(exc, FacadeError):
        return exc

    message = str(exc) or type(exc).__name__

    if isinstance(exc, HttpResponseError):
        status_code = exc.status_code
        error_code = getattr(exc, "error_code", None)
        if isinstance(exc, ResourceNotFoundError) or status_code == 404:
            error = NotFoundError(message, status_code, error_code)
        elif isinstance(exc, ClientAuthenticationError) or status_code in (401, 403):
            error = AuthError(message, status_code, error_code)
        else:
            error = RemoteError(message, status_code, error_code)
    elif isinstance(exc, (ServiceRequestError, ServiceResponseError)):
        error = NetworkError(message)
    elif isinstance(exc, UnicodeDecodeError):
        error = DecodeError(f"Blob content is not valid UTF-8 text: {message}")
    else:
        error = RemoteError(message)

    error.__cause__ = exc
    return error
