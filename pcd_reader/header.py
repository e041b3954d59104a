from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Tuple

from .errors import HeaderParseError, PcdIOError, UnsupportedFormatError

logger = logging.getLogger(__name__)

SUPPORTED_DATA_FORMAT = "binary_compressed"
TYPE_TAGS = ("F", "U", "I")

_IGNORED_DIRECTIVES = frozenset(["VERSION", "COUNT", "WIDTH", "HEIGHT", "VIEWPOINT"])


@dataclass(frozen=True)
class PointCloudHeader:
    data_format: str
    num_points: int
    field_names: Tuple[str, ...]
    size_list: Tuple[int, ...]
    type_list: Tuple[str, ...]

    @property
    def point_size(self) -> int:
        """Bytes occupied by one point across all fields."""
        return sum(self.size_list)

    @property
    def payload_size(self) -> int:
        """Expected length of the decompressed SoA buffer."""
        return self.point_size * self.num_points


def _read_header_line(stream: BinaryIO) -> Optional[str]:
    """Next header line without its terminator, or None for a comment."""
    try:
        raw = stream.readline()
    except OSError as e:
        raise PcdIOError(f"failed to read PCD header: {e}") from e
    if not raw.endswith(b"\n"):
        # EOF (b"") or a last line without terminator: DATA was never reached.
        raise HeaderParseError("unexpected end of file inside PCD header")
    raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    if raw.startswith(b"#"):
        return None
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise HeaderParseError(f"PCD header line is not ASCII: {raw[:40]!r}") from e


def _parse_unsigned(token: str, directive: str) -> int:
    if not token.isdigit():
        raise HeaderParseError(
            f"entry {directive} in header has wrong format: '{token}' is not an unsigned integer"
        )
    return int(token)


def _single_value(words: List[str], directive: str) -> str:
    if len(words) != 2:
        raise HeaderParseError(
            f"entry {directive} in header has wrong format: it consists of {len(words)} words, expected 2"
        )
    return words[1]


def parse_header(stream: BinaryIO) -> PointCloudHeader:
    """
    Scan PCD header lines up to and including the `DATA` directive.

    On return the stream is positioned at the first byte of the binary
    section. Only `DATA binary_compressed` is accepted.
    """
    num_points = 0
    field_names: List[str] = []
    size_list: List[int] = []
    type_list: List[str] = []

    while True:
        line = _read_header_line(stream)
        if line is None:
            continue
        words = line.split()
        if not words:
            raise HeaderParseError("unknown header entry: empty line")
        key = words[0]

        if key in _IGNORED_DIRECTIVES:
            continue
        elif key == "FIELDS":
            field_names = words[1:]
        elif key == "SIZE":
            size_list = [_parse_unsigned(w, key) for w in words[1:]]
        elif key == "TYPE":
            type_list = words[1:]
            for tag in type_list:
                if tag not in TYPE_TAGS:
                    raise HeaderParseError(f"entry TYPE in header has unknown type tag '{tag}'")
        elif key == "POINTS":
            num_points = _parse_unsigned(_single_value(words, key), key)
        elif key == "DATA":
            data_format = _single_value(words, key)
            if data_format != SUPPORTED_DATA_FORMAT:
                raise UnsupportedFormatError(
                    f"DATA '{data_format}' is not supported, only {SUPPORTED_DATA_FORMAT}"
                )
            break
        else:
            raise HeaderParseError(f"unknown header entry '{key}'")

    if not (len(field_names) == len(size_list) == len(type_list)):
        raise HeaderParseError(
            "FIELDS, SIZE and TYPE declare different numbers of entries "
            f"({len(field_names)}, {len(size_list)}, {len(type_list)})"
        )

    header = PointCloudHeader(
        data_format=data_format,
        num_points=num_points,
        field_names=tuple(field_names),
        size_list=tuple(size_list),
        type_list=tuple(type_list),
    )
    logger.debug(
        "parsed PCD header: %d points, fields=%s", header.num_points, ",".join(header.field_names)
    )
    return header
