"""Exceptions raised while loading and reading PCD files."""

from __future__ import annotations


class PcdError(Exception):
    """Base class for every error raised by `pcd_reader`."""


class PcdIOError(PcdError, OSError):
    """The file could not be opened or ended before the expected data."""


class HeaderParseError(PcdError, ValueError):
    """A header line is malformed or uses an unknown directive."""


class UnsupportedFormatError(PcdError, ValueError):
    """The `DATA` directive names a format other than binary_compressed."""


class DecompressionError(PcdError, ValueError):
    """The compressed block is malformed or expands to the wrong size."""


class FieldNotFoundError(PcdError, LookupError):
    """The requested field name is not declared in the header."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"point cloud does not contain field '{field_name}'")
        self.field_name = field_name


class TypeMismatchError(PcdError, TypeError):
    """The field exists but was requested with a different type or width."""

    def __init__(
        self,
        field_name: str,
        requested: str,
        declared: str,
    ) -> None:
        super().__init__(
            f"field '{field_name}' is declared as {declared}, not {requested}"
        )
        self.field_name = field_name
        self.requested = requested
        self.declared = declared
