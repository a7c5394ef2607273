"""blob-facade: non-raising read/write/copy/move/delete/list over Azure Blob Storage."""

from .constants import FACADE_VERSION
from .errors import (
    AuthError,
    ConfirmationError,
    DecodeError,
    FacadeError,
    InvalidParameterError,
    MissingParameterError,
    NetworkError,
    NotFoundError,
    RemoteError,
    ValidationError,
)
from .facade import BlobFacade
from .result import Result
from .storage_models import BlobEntry, ContainerEntry, CopyResult, DeleteResult

__version__ = FACADE_VERSION

__all__ = [
    "AuthError",
    "BlobEntry",
    "BlobFacade",
    "ConfirmationError",
    "ContainerEntry",
    "CopyResult",
    "DecodeError",
    "DeleteResult",
    "FacadeError",
    "InvalidParameterError",
    "MissingParameterError",
    "NetworkError",
    "NotFoundError",
    "RemoteError",
    "Result",
    "ValidationError",
]
