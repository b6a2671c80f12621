"""
Streamed datastream content.

Wraps a streamed httpx response body in a standard binary file object so
callers can use read(), iteration and ``with`` blocks without depending on
httpx, and without the body ever being loaded into memory at once.
"""
from __future__ import annotations

import io
import logging
from typing import Iterator, Optional

import httpx

from ..errors import RetrievalError

__all__ = ["DatastreamContent"]

logger = logging.getLogger(__name__)


class DatastreamContent(io.RawIOBase):
    """
    Read-only binary stream over a streamed HTTP response body.

    Closing the stream closes the response and returns its connection to
    the pool. Transport failures during reads surface as RetrievalError.
    """

    def __init__(self, response: httpx.Response, *, description: Optional[str] = None) -> None:
        super().__init__()
        self._response = response
        self._chunks: Iterator[bytes] = response.iter_bytes()
        self._pending = b""
        self._description = description or str(response.request.url)

    @property
    def response(self) -> httpx.Response:
        return self._response

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed datastream content")

        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except httpx.HTTPError as e:
                raise RetrievalError(f"Error reading content of {self._description}: {e}") from e

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._response.close()
            logger.debug(f"Closed content stream for {self._description}")
        finally:
            super().close()
