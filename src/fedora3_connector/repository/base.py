"""
Repository interfaces for the Fedora 3 connector.

These protocols define the boundary between the datastream resolver and the
repository it reads from, enabling clean dependency injection and testing
with fakes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import IO, Optional, Protocol, runtime_checkable

__all__ = ["DatastreamProfile", "RepositoryClient", "SHA1_CHECKSUM_TYPE"]

SHA1_CHECKSUM_TYPE = "SHA-1"


@dataclass(frozen=True)
class DatastreamProfile:
    """
    Metadata describing a datastream, without its content.

    Invariants:
    - size: declared byte length (>= 0)
    - created_date: timezone-aware, UTC
    - checksum: hex digits or empty; only trusted when checksum_type is SHA-1
    """
    pid: str
    dsid: str
    mime_type: str
    created_date: datetime
    size: int
    checksum_type: str = ""
    checksum: str = ""
    label: str = ""
    version_id: Optional[str] = None
    state: Optional[str] = None
    control_group: Optional[str] = None
    location: Optional[str] = None

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("size must be non-negative")

    @property
    def declares_sha1(self) -> bool:
        """True when the repository recorded a SHA-1 value for this datastream."""
        return self.checksum_type.lower() == SHA1_CHECKSUM_TYPE.lower() and bool(self.checksum)


@runtime_checkable
class RepositoryClient(Protocol):
    """Protocol for the two repository calls the datastream resolver depends on."""

    def get_datastream_profile(self, pid: str, dsid: str) -> DatastreamProfile:
        """
        Fetch the profile of one datastream.

        Args:
            pid: Object PID
            dsid: Datastream ID

        Returns:
            Profile as reported by the repository

        Raises:
            DatastreamNotFoundError: If the object or datastream does not exist
            RetrievalError: For transport errors or unusable responses
        """
        ...

    def open_datastream_content(self, pid: str, dsid: str) -> IO[bytes]:
        """
        Open the content of the current version of one datastream.

        Returns:
            Readable byte stream; the caller must close it

        Raises:
            DatastreamNotFoundError: If the object or datastream does not exist
            RetrievalError: For transport errors
        """
        ...
