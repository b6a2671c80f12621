"""
Datastream records resolved from a remote Fedora 3 repository.

RemoteDatastreamRecord fetches a datastream profile once, at construction,
and serves all metadata from that snapshot. Content is streamed on demand
and the SHA-1 is taken from the repository when it recorded one, computed
from the content otherwise.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import IO, Optional

from .digest import CHUNK_SIZE, sha1_bytes_from_hex, sha1_of_stream
from .errors import IdentityMismatchError
from .record import DatastreamRecord
from .repository.base import DatastreamProfile, RepositoryClient

__all__ = ["RemoteDatastreamRecord"]

logger = logging.getLogger(__name__)


class RemoteDatastreamRecord(DatastreamRecord):
    """
    DatastreamRecord backed by a RepositoryClient.

    Metadata is an immutable snapshot of the profile fetched at construction
    and is never refreshed, so it goes stale if the source datastream is
    modified during the record's lifetime. The SHA-1 is cached after the
    first successful call.

    Records share no state with each other, but a single record's digest
    cache is not locked: callers using one record from several threads must
    serialize the first sha1() call themselves.
    """

    def __init__(self, client: RepositoryClient, pid: str, dsid: str, *, chunk_size: Optional[int] = None):
        """
        Fetch and validate the profile of pid/dsid.

        Args:
            client: Repository to read from
            pid: Object PID
            dsid: Datastream ID
            chunk_size: Bytes per read when computing the SHA-1 from content;
                defaults to the client settings' chunk_size, else CHUNK_SIZE

        Raises:
            RetrievalError: If the profile cannot be fetched
            IdentityMismatchError: If the profile describes a different datastream
            ValueError: If chunk_size is not positive
        """
        self._client = client
        self._pid = pid
        self._dsid = dsid
        if chunk_size is None:
            settings = getattr(client, "settings", None)
            chunk_size = getattr(settings, "chunk_size", CHUNK_SIZE)
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size
        self._sha1: Optional[bytes] = None

        self._profile = client.get_datastream_profile(pid, dsid)
        if self._profile.pid != pid:
            raise IdentityMismatchError("Pid", pid, self._profile.pid)
        if self._profile.dsid != dsid:
            raise IdentityMismatchError("DSID", dsid, self._profile.dsid)

    def __repr__(self) -> str:
        return f"RemoteDatastreamRecord(pid={self._pid!r}, dsid={self._dsid!r})"

    @property
    def profile(self) -> DatastreamProfile:
        return self._profile

    @property
    def pid(self) -> str:
        return self._profile.pid

    @property
    def id(self) -> str:
        return self._profile.dsid

    @property
    def mime_type(self) -> str:
        return self._profile.mime_type

    @property
    def content_length(self) -> int:
        return self._profile.size

    @property
    def created_date(self) -> datetime:
        return self._profile.created_date

    @property
    def modification_date(self) -> datetime:
        # A Fedora 3 profile only carries the creation time of the current
        # version, which is when the datastream was last modified.
        return self._profile.created_date

    @property
    def label(self) -> str:
        return self._profile.label

    @property
    def version_id(self) -> Optional[str]:
        return self._profile.version_id

    @property
    def state(self) -> Optional[str]:
        return self._profile.state

    @property
    def control_group(self) -> Optional[str]:
        return self._profile.control_group

    @property
    def location(self) -> Optional[str]:
        return self._profile.location

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def open_stream(self) -> IO[bytes]:
        """
        Open a new stream over the current content of the datastream.

        Issues a fresh content request on every call; nothing is buffered.
        """
        return self._client.open_datastream_content(self._pid, self._dsid)

    def sha1(self) -> bytes:
        """
        Get the SHA-1 of the datastream content.

        Uses the checksum recorded by the repository when its type is SHA-1,
        otherwise streams the content through a SHA-1 digest.
        """
        if self._sha1 is not None:
            return self._sha1

        if self._profile.declares_sha1:
            self._sha1 = sha1_bytes_from_hex(self._profile.checksum)
            logger.debug(f"Loaded SHA-1 for {self._pid} {self._dsid} from repository")
            return self._sha1

        start = time.monotonic()
        with self.open_stream() as stream:
            digest = sha1_of_stream(stream, self._chunk_size)
        self._sha1 = digest
        logger.debug(f"Computed SHA-1 from {self._dsid} on {self._pid} in "
                     f"{(time.monotonic() - start) * 1000:.0f}ms")
        return digest
