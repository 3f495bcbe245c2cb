"""
Typed error classes for the codegen support layer.

Address parsing raises `MissingPrefixError` / `InvalidEncodingError` so
callers can report the two failure causes separately while still catching
`AddressError` (a `ValueError`) for both. Remote fetches raise `FetchError`.
Dependency queries raise `DependencyQueryError`, which the namespace
resolver always absorbs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

__all__ = [
    "CodegenError",
    "AddressError",
    "MissingPrefixError",
    "InvalidEncodingError",
    "FetchError",
    "DependencyQueryError",
]


class CodegenError(Exception):
    """Base class for all codegen support errors."""


class AddressError(CodegenError, ValueError):
    """Raised when a literal contract address cannot be parsed."""

    kind: ClassVar[str] = "invalid"

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.value = value

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.value is None:
            return self.message
        return f"{self.message} (got {self.value!r})"


class MissingPrefixError(AddressError):
    """The address string does not start with '0x'."""

    kind: ClassVar[str] = "missing_prefix"


class InvalidEncodingError(AddressError):
    """The address payload is not exactly 40 hex digits."""

    kind: ClassVar[str] = "invalid_encoding"


@dataclass(slots=True)
class FetchError(CodegenError):
    """
    Raised when a remote document cannot be retrieved.

    The underlying transport exception is kept as ``__cause__``.
    """

    url: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"FetchError url={self.url}: {self.message}"


class DependencyQueryError(CodegenError):
    """Raised by dependency queries when the host project cannot be inspected."""
