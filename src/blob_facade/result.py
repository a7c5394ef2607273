"""Uniform result type returned by every facade operation."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import FacadeError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``data`` on success or ``err`` on failure, never both.

    Callers must check ``err`` (or ``ok``) before trusting ``data``.
    """

    data: Optional[T] = None
    err: Optional[FacadeError] = None

    def __post_init__(self):
        if (self.data is None) == (self.err is None):
            raise ValueError("Result requires exactly one of data or err")

    @staticmethod
    def success(value: T) -> "Result[T]":
        return Result(data=value)

    @staticmethod
    def failure(error: FacadeError) -> "Result[T]":
        return Result(err=error)

    @property
    def ok(self) -> bool:
        return self.err is None

    def unwrap(self) -> T:
        """Return ``data`` or raise the contained error."""
        if self.err is not None:
            raise self.err
        return self.data
