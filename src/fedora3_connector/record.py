"""
Datastream record contract.

Defines what must be knowable about one Fedora 3 datastream in order to
import it into a newer repository. Implementations differ only in where
they get the information from.
"""
from __future__ import annotations

from datetime import datetime
from typing import IO, Protocol, runtime_checkable

__all__ = ["DatastreamRecord"]


@runtime_checkable
class DatastreamRecord(Protocol):
    """Protocol exposing the identity, metadata, content and SHA-1 of a datastream."""

    @property
    def pid(self) -> str:
        """PID of the object whose datastream is represented."""
        ...

    @property
    def id(self) -> str:
        """The DSID."""
        ...

    @property
    def mime_type(self) -> str:
        ...

    @property
    def modification_date(self) -> datetime:
        """Modification date of the datastream described by this record."""
        ...

    @property
    def created_date(self) -> datetime:
        """Creation date of the datastream described by this record."""
        ...

    @property
    def content_length(self) -> int:
        """Length in bytes of the datastream content."""
        ...

    def open_stream(self) -> IO[bytes]:
        """
        Open a new stream over the datastream content.

        Every call returns a fresh, independently owned stream; the caller
        must close it (streams are context managers).

        Raises:
            RetrievalError: If the repository is unreachable or rejects the request
        """
        ...

    def sha1(self) -> bytes:
        """
        Get (or compute) the 20-byte SHA-1 of the datastream content.

        Raises:
            RetrievalError: If content must be read and cannot be
            IntegrityError: If a declared digest is present but malformed
        """
        ...
