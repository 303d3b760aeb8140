"""
Discriminated result type returned by the internal fetch helpers.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Either a fetched value or the reason the fetch failed.

    ``status`` holds the HTTP status code whenever a response was received,
    including on failure.
    """

    value: Optional[T] = None
    error: Optional[str] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T, status: Optional[int] = None) -> "FetchResult[T]":
        return cls(value=value, status=status)

    @classmethod
    def failure(cls, error: str, status: Optional[int] = None) -> "FetchResult[T]":
        return cls(error=error, status=status)

    def unwrap_or(self, default: Optional[T] = None) -> Optional[T]:
        """Returns the value on success, ``default`` otherwise."""
        return self.value if self.ok else default
