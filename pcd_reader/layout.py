from __future__ import annotations

from .errors import FieldNotFoundError, TypeMismatchError
from .header import PointCloudHeader


def field_offset(header: PointCloudHeader, field_name: str, type_tag: str, size: int) -> int:
    """
    Offset of `field_name`'s column in byte-width units.

    The decompressed buffer stores one column per field in declaration order,
    so the column starts at `offset * num_points`. Only the first field with a
    matching name is considered.
    """
    offset = 0
    for name, field_size, field_type in zip(header.field_names, header.size_list, header.type_list):
        if name == field_name:
            if field_type != type_tag or field_size != size:
                raise TypeMismatchError(
                    field_name,
                    requested=f"{type_tag}{size}",
                    declared=f"{field_type}{field_size}",
                )
            return offset
        offset += field_size
    raise FieldNotFoundError(field_name)
