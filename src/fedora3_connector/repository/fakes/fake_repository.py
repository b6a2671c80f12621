"""
Fake repository client implementation for testing.

This implementation explicitly subclasses RepositoryClient to ensure interface
changes break CI immediately, preventing silent drift.
"""
from __future__ import annotations

import hashlib
import io
from collections import Counter
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from ...errors import DatastreamNotFoundError, RetrievalError
from ..base import DatastreamProfile, RepositoryClient, SHA1_CHECKSUM_TYPE

__all__ = ["FakeRepositoryClient"]

_EPOCH = datetime(2013, 1, 1, tzinfo=timezone.utc)

Key = Tuple[str, str]


class FakeRepositoryClient(RepositoryClient):
    """
    In-memory repository client for testing.

    This is a test double; not for production use.
    Keys are (pid, dsid); values are a profile and content bytes.
    Request counters let tests assert how many calls a resolver made.
    """

    def __init__(self) -> None:
        self._profiles: Dict[Key, DatastreamProfile] = {}
        self._content: Dict[Key, bytes] = {}
        self._content_failures: Dict[Key, Exception] = {}
        self.profile_requests: Counter = Counter()
        self.content_requests: Counter = Counter()

    def add_datastream(
        self,
        pid: str,
        dsid: str,
        content: bytes = b"",
        *,
        mime_type: str = "application/octet-stream",
        created_date: datetime = _EPOCH,
        checksum_type: str = "DISABLED",
        checksum: Optional[str] = None,
        reported_pid: Optional[str] = None,
        reported_dsid: Optional[str] = None,
        **overrides,
    ) -> DatastreamProfile:
        """
        Store a datastream and return the profile the fake will report.

        checksum defaults to the real SHA-1 of content when checksum_type is
        SHA-1. reported_pid and reported_dsid change the ids inside the
        profile (still stored under pid/dsid) to simulate a server answering
        for the wrong datastream. Other keyword overrides replace profile fields.
        """
        if checksum is None:
            checksum = hashlib.sha1(content).hexdigest() if checksum_type == SHA1_CHECKSUM_TYPE else ""

        profile = DatastreamProfile(
            pid=reported_pid or pid,
            dsid=reported_dsid or dsid,
            mime_type=mime_type,
            created_date=created_date,
            size=len(content),
            checksum_type=checksum_type,
            checksum=checksum,
        )
        if overrides:
            profile = replace(profile, **overrides)

        self._profiles[(pid, dsid)] = profile
        self._content[(pid, dsid)] = content
        return profile

    def fail_content(self, pid: str, dsid: str, error: Optional[Exception] = None) -> None:
        """Make content requests for pid/dsid raise until clear_failures() is called."""
        self._content_failures[(pid, dsid)] = error or RetrievalError(f"Simulated failure for {pid}/{dsid}", status_code=503)

    def clear_failures(self) -> None:
        self._content_failures.clear()

    def get_datastream_profile(self, pid: str, dsid: str) -> DatastreamProfile:
        self.profile_requests[(pid, dsid)] += 1
        if (pid, dsid) not in self._profiles:
            raise DatastreamNotFoundError(f"Not found: profile of {pid}/{dsid}", status_code=404)
        return self._profiles[(pid, dsid)]

    def open_datastream_content(self, pid: str, dsid: str) -> io.BytesIO:
        self.content_requests[(pid, dsid)] += 1
        if (pid, dsid) in self._content_failures:
            raise self._content_failures[(pid, dsid)]
        if (pid, dsid) not in self._content:
            raise DatastreamNotFoundError(f"Not found: content of {pid}/{dsid}", status_code=404)
        return io.BytesIO(self._content[(pid, dsid)])

    def clear(self) -> None:
        """Clear all stored data (test utility)."""
        self._profiles.clear()
        self._content.clear()
        self._content_failures.clear()
        self.profile_requests.clear()
        self.content_requests.clear()
