"""Loaded binary_compressed PCD point cloud.

Usage:

    pcd = PointCloud.from_path("sample/sample_binary_compressed.pcd")
    x = pcd.get_data_f32("x")
    ring = pcd.get_data_u8("ring")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Tuple

import numpy as np

from .compression import decompress_payload
from .errors import DecompressionError, PcdIOError
from .fields import (
    FLOAT32,
    FLOAT64,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    FieldType,
    read_field,
)
from .header import PointCloudHeader, parse_header

__all__ = ["PointCloud", "load"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class PointCloud:
    header: PointCloudHeader
    decompressed_buffer: bytes

    def __post_init__(self) -> None:
        if len(self.decompressed_buffer) != self.header.payload_size:
            raise DecompressionError(
                f"decompressed payload has {len(self.decompressed_buffer)} bytes, header describes "
                f"{self.header.point_size} bytes x {self.header.num_points} points = {self.header.payload_size}"
            )

    def __repr__(self) -> str:
        return (
            f"PointCloud(header={self.header!r}, "
            f"decompressed_buffer=[{len(self.decompressed_buffer)} bytes buffer])"
        )

    @classmethod
    def from_fileobj(cls, f: BinaryIO) -> "PointCloud":
        """Parse a point cloud from a binary stream positioned at the header."""
        header = parse_header(f)
        buf = decompress_payload(f, expected_size=header.payload_size)
        return cls(header=header, decompressed_buffer=buf)

    @classmethod
    def from_path(cls, path: Path | str) -> "PointCloud":
        path = Path(path)
        logger.debug("loading %s", path)
        try:
            f = open(path, "rb")
        except OSError as e:
            raise PcdIOError(f"error reading pcd file '{path}': {e}") from e
        with f:
            pc = cls.from_fileobj(f)
        logger.info("loaded %s: %d points, %d fields", path.name, pc.num_points, len(pc.field_names))
        return pc

    # --- schema ---

    @property
    def data_format(self) -> str:
        return self.header.data_format

    @property
    def num_points(self) -> int:
        return self.header.num_points

    @property
    def field_names(self) -> Tuple[str, ...]:
        return self.header.field_names

    @property
    def size_list(self) -> Tuple[int, ...]:
        return self.header.size_list

    @property
    def type_list(self) -> Tuple[str, ...]:
        return self.header.type_list

    # --- typed columns ---

    def get_data(self, field_name: str, field_type: FieldType) -> np.ndarray:
        """Decode `field_name` as `field_type`; a new array on every call."""
        return read_field(self.decompressed_buffer, self.header, field_name, field_type)

    def get_data_f32(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, FLOAT32)

    def get_data_f64(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, FLOAT64)

    def get_data_u8(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, UINT8)

    def get_data_u16(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, UINT16)

    def get_data_u32(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, UINT32)

    def get_data_u64(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, UINT64)

    def get_data_i16(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, INT16)

    def get_data_i32(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, INT32)

    def get_data_i64(self, field_name: str) -> np.ndarray:
        return self.get_data(field_name, INT64)


def load(path: Path | str) -> PointCloud:
    """Load a binary_compressed PCD file."""
    return PointCloud.from_path(path)
