"""Reader for binary_compressed PCD point clouds."""

from .errors import (
    DecompressionError,
    FieldNotFoundError,
    HeaderParseError,
    PcdError,
    PcdIOError,
    TypeMismatchError,
    UnsupportedFormatError,
)
from .fields import FIELD_TYPES, FieldType
from .header import SUPPORTED_DATA_FORMAT, PointCloudHeader
from .point_cloud import PointCloud, load

__all__ = [
    "DecompressionError",
    "FIELD_TYPES",
    "FieldNotFoundError",
    "FieldType",
    "HeaderParseError",
    "PcdError",
    "PcdIOError",
    "PointCloud",
    "PointCloudHeader",
    "SUPPORTED_DATA_FORMAT",
    "TypeMismatchError",
    "UnsupportedFormatError",
    "load",
]
