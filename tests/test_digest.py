"""
Tests for hex checksum decoding and streamed SHA-1 computation.
"""
from __future__ import annotations

import hashlib
import io
import random

import pytest

from fedora3_connector.digest import (
    SHA1_DIGEST_SIZE,
    bytes_from_hex,
    sha1_bytes_from_hex,
    sha1_of_stream,
)
from fedora3_connector.errors import IntegrityError


class TestBytesFromHex:
    """Test decoding of hex digit pairs."""

    def test_decodes_most_significant_nibble_first(self):
        assert bytes_from_hex("0aff10") == b"\x0a\xff\x10"

    def test_accepts_upper_and_mixed_case(self):
        assert bytes_from_hex("DEADbeef") == b"\xde\xad\xbe\xef"

    def test_empty_string_decodes_to_empty_bytes(self):
        assert bytes_from_hex("") == b""

    def test_round_trip_of_20_byte_values(self):
        rng = random.Random(1234)
        values = [bytes(20), b"\xff" * 20, bytes(range(20))]
        values += [bytes(rng.getrandbits(8) for _ in range(20)) for _ in range(25)]

        for value in values:
            assert bytes_from_hex(value.hex()) == value

    @pytest.mark.parametrize("value", ["a", "abc", "da39a3ee5e6b4b0d3255bfef95601890afd8070"])
    def test_rejects_odd_length(self, value):
        with pytest.raises(IntegrityError, match="odd length"):
            bytes_from_hex(value)

    @pytest.mark.parametrize("value", ["zz", "0x12", "12 3", "12\n4", "g0", "١٢"])
    def test_rejects_non_hex_characters(self, value):
        with pytest.raises(IntegrityError, match="non-hex"):
            bytes_from_hex(value)

    def test_error_carries_offending_value(self):
        with pytest.raises(IntegrityError) as exc_info:
            bytes_from_hex("xyz0")
        assert exc_info.value.value == "xyz0"


class TestSha1BytesFromHex:
    """Test decoding of declared SHA-1 values."""

    def test_decodes_empty_content_sha1(self):
        digest = sha1_bytes_from_hex("da39a3ee5e6b4b0d3255bfef95601890afd80709")
        assert digest == hashlib.sha1(b"").digest()
        assert len(digest) == SHA1_DIGEST_SIZE

    def test_rejects_md5_length_value(self):
        md5_hex = hashlib.md5(b"content").hexdigest()
        with pytest.raises(IntegrityError, match="expected 20"):
            sha1_bytes_from_hex(md5_hex)

    def test_rejects_sha256_length_value(self):
        with pytest.raises(IntegrityError, match="expected 20"):
            sha1_bytes_from_hex(hashlib.sha256(b"content").hexdigest())


class TestSha1OfStream:
    """Test streamed SHA-1 computation."""

    def test_file_like_stream(self):
        data = b"The quick brown fox jumps over the lazy dog"
        assert sha1_of_stream(io.BytesIO(data)) == hashlib.sha1(data).digest()

    def test_small_chunks_give_same_digest(self):
        data = bytes(range(256)) * 40
        assert sha1_of_stream(io.BytesIO(data), chunk_size=7) == hashlib.sha1(data).digest()

    def test_iterable_of_chunks(self):
        chunks = [b"abc", b"", b"def", b"ghi"]
        assert sha1_of_stream(iter(chunks)) == hashlib.sha1(b"abcdefghi").digest()

    def test_empty_stream(self):
        assert sha1_of_stream(io.BytesIO(b"")).hex() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"

    def test_reads_incrementally(self):
        """Test that content is requested in chunk_size pieces, never all at once."""
        class RecordingStream(io.BytesIO):
            def __init__(self, data):
                super().__init__(data)
                self.sizes = []

            def read(self, size=-1):
                self.sizes.append(size)
                return super().read(size)

        stream = RecordingStream(b"x" * 100)
        sha1_of_stream(stream, chunk_size=32)
        assert stream.sizes == [32, 32, 32, 32, 32]

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_non_positive_chunk_size_rejected(self, chunk_size):
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            sha1_of_stream(io.BytesIO(b"real content"), chunk_size=chunk_size)
