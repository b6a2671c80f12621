"""
Content digest helpers.

Decoding of repository-declared hex checksums and streamed SHA-1 computation
over datastream content.
"""
from __future__ import annotations

import hashlib
import re
from typing import IO, Iterable

from .errors import IntegrityError
from .settings import DEFAULT_CHUNK_SIZE

__all__ = ["bytes_from_hex", "sha1_bytes_from_hex", "sha1_of_stream", "SHA1_DIGEST_SIZE", "CHUNK_SIZE"]

SHA1_DIGEST_SIZE = 20
CHUNK_SIZE = DEFAULT_CHUNK_SIZE

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def bytes_from_hex(value: str) -> bytes:
    """
    Convert a string of hex digit pairs into the bytes it expresses.

    Each pair is read most significant nibble first, so the result has
    ``len(value) // 2`` bytes. Unlike ``bytes.fromhex`` no whitespace is
    tolerated.

    Raises:
        IntegrityError: If the string has odd length or contains non-hex characters
    """
    if len(value) % 2:
        raise IntegrityError(f"Hex string has odd length {len(value)}: {value!r}", value=value)
    if not _HEX_RE.fullmatch(value):
        raise IntegrityError(f"Hex string contains non-hex characters: {value!r}", value=value)
    return bytes.fromhex(value)


def sha1_bytes_from_hex(value: str) -> bytes:
    """Decode a declared SHA-1 checksum, requiring exactly 20 bytes."""
    data = bytes_from_hex(value)
    if len(data) != SHA1_DIGEST_SIZE:
        raise IntegrityError(
            f"Declared SHA-1 decodes to {len(data)} bytes, expected {SHA1_DIGEST_SIZE}: {value!r}",
            value=value,
        )
    return data


def sha1_of_stream(stream: IO[bytes] | Iterable[bytes], chunk_size: int = CHUNK_SIZE) -> bytes:
    """
    Compute the SHA-1 of a byte stream without buffering it.

    Args:
        stream: Content stream (file-like with read() or iterable of bytes)
        chunk_size: Bytes requested per read() call

    Returns:
        Raw 20-byte digest

    Raises:
        ValueError: If chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    hash_obj = hashlib.sha1()
    if hasattr(stream, "read"):
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            hash_obj.update(chunk)
    else:
        for chunk in stream:
            hash_obj.update(chunk)
    return hash_obj.digest()
