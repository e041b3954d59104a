"""Typed column extraction from the decompressed SoA buffer.

Each supported numeric type is registered once as a `FieldType` pairing the
PCD `(TYPE, SIZE)` combination with a numpy dtype. Callers choose the
`FieldType`; the schema is only used to validate the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from .errors import FieldNotFoundError
from .header import PointCloudHeader
from .layout import field_offset


@dataclass(frozen=True)
class FieldType:
    name: str
    type_tag: str  # "F", "U" or "I"
    size: int  # bytes per element
    dtype: np.dtype

    def decode(self, raw: bytes) -> np.ndarray:
        """Decode little-endian elements into a new native-order array."""
        if self.size == 1:
            return np.frombuffer(raw, dtype=self.dtype).copy()
        return np.frombuffer(raw, dtype=self.dtype.newbyteorder("<")).astype(self.dtype)


FLOAT32 = FieldType("float32", "F", 4, np.dtype(np.float32))
FLOAT64 = FieldType("float64", "F", 8, np.dtype(np.float64))
UINT8 = FieldType("uint8", "U", 1, np.dtype(np.uint8))
UINT16 = FieldType("uint16", "U", 2, np.dtype(np.uint16))
UINT32 = FieldType("uint32", "U", 4, np.dtype(np.uint32))
UINT64 = FieldType("uint64", "U", 8, np.dtype(np.uint64))
INT16 = FieldType("int16", "I", 2, np.dtype(np.int16))
INT32 = FieldType("int32", "I", 4, np.dtype(np.int32))
INT64 = FieldType("int64", "I", 8, np.dtype(np.int64))

# int8 ("I", 1) is intentionally absent.
FIELD_TYPES: Dict[Tuple[str, int], FieldType] = {
    (ft.type_tag, ft.size): ft
    for ft in (FLOAT32, FLOAT64, UINT8, UINT16, UINT32, UINT64, INT16, INT32, INT64)
}


def read_field(
    buffer: bytes,
    header: PointCloudHeader,
    field_name: str,
    field_type: FieldType,
) -> np.ndarray:
    """Return a fresh (num_points,) array with the values of `field_name`."""
    if field_name not in header.field_names:
        raise FieldNotFoundError(field_name)
    offset = field_offset(header, field_name, field_type.type_tag, field_type.size)
    n = header.num_points
    start = offset * n
    stop = (offset + field_type.size) * n
    return field_type.decode(buffer[start:stop])
