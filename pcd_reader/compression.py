from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Optional

import lzf

from .errors import DecompressionError, PcdIOError

logger = logging.getLogger(__name__)

# compressed_size, uncompressed_size
_SIZES = struct.Struct("<II")


def _read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    try:
        data = stream.read(n)
    except OSError as e:
        raise PcdIOError(f"failed to read {what}: {e}") from e
    if len(data) != n:
        raise PcdIOError(f"unexpected end of file while reading {what}: got {len(data)} of {n} bytes")
    return data


def decompress_payload(stream: BinaryIO, expected_size: Optional[int] = None) -> bytes:
    """
    Read the length-prefixed LZF block following the header and expand it.

    Layout:
      uint32 LE compressed size
      uint32 LE uncompressed size
      compressed bytes

    Returns exactly `uncompressed size` bytes. When `expected_size` is given,
    a different declared size is rejected before anything is decompressed.
    """
    compressed_size, uncompressed_size = _SIZES.unpack(
        _read_exact(stream, _SIZES.size, "compressed data sizes")
    )
    if expected_size is not None and uncompressed_size != expected_size:
        raise DecompressionError(
            f"compressed data declares {uncompressed_size} bytes, header describes {expected_size}"
        )
    compressed = _read_exact(stream, compressed_size, "compressed data")
    logger.debug("decompressing %d -> %d bytes", compressed_size, uncompressed_size)

    if uncompressed_size == 0:
        if compressed_size != 0:
            raise DecompressionError("non-empty compressed block declares an empty payload")
        return b""

    try:
        buf = lzf.decompress(compressed, uncompressed_size)
    except ValueError as e:
        raise DecompressionError(f"error decompressing binary_compressed data: {e}") from e
    # lzf returns None when the output would not fit into uncompressed_size
    if buf is None:
        raise DecompressionError(f"compressed data does not fit into {uncompressed_size} bytes")
    if len(buf) != uncompressed_size:
        raise DecompressionError(
            f"compressed data expands to {len(buf)} bytes, expected {uncompressed_size}"
        )
    return buf
