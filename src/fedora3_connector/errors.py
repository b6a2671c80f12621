"""
Datastream error classes.

Provides a small taxonomy of errors raised while resolving a Fedora 3
datastream. HTTP status codes and transport exceptions are mapped onto these
at the client boundary so callers never need to catch httpx exceptions.
"""
from __future__ import annotations

from typing import Optional


class DatastreamError(Exception):
    """Base class for all datastream errors."""
    pass


class RetrievalError(DatastreamError):
    """
    Transport or protocol failure while talking to the repository.

    Raised when:
    - The repository is unreachable (connection, timeout, read errors)
    - The repository answers with a non-success HTTP status
    - The response body is not what the endpoint should return
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DatastreamNotFoundError(RetrievalError):
    """
    Object or datastream does not exist.

    Raised when:
    - HTTP 404 Not Found from a profile or content request
    - A fake repository has no datastream under the requested ids
    """
    pass


class ProfileParseError(RetrievalError):
    """The repository returned a document that is not a usable datastream profile."""
    pass


class IdentityMismatchError(DatastreamError):
    """
    The fetched profile describes a different datastream than the one requested.

    Raised at construction time only; no record is produced.
    """

    def __init__(self, field: str, expected: str, actual: str):
        super().__init__(f"{field} mismatch! {expected} != {actual}")
        self.field = field
        self.expected = expected
        self.actual = actual


class IntegrityError(DatastreamError):
    """A declared checksum is present but is not valid hex of the expected length."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


__all__ = [
    "DatastreamError",
    "RetrievalError",
    "DatastreamNotFoundError",
    "ProfileParseError",
    "IdentityMismatchError",
    "IntegrityError",
]
