from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import lzf
import numpy as np
import pytest

Column = Tuple[str, str, int, np.ndarray]  # name, TYPE tag, SIZE, values

_KIND = {"F": "f", "U": "u", "I": "i"}


def soa_payload(columns: Sequence[Column]) -> bytes:
    """Concatenate little-endian columns in declaration order."""
    parts = []
    for _, tag, size, values in columns:
        dt = np.dtype(f"<{_KIND[tag]}{size}")
        parts.append(np.asarray(values).astype(dt).tobytes())
    return b"".join(parts)


def compressed_block(raw: bytes) -> bytes:
    """Length prefixes followed by the LZF data, as stored after the header."""
    if not raw:
        return struct.pack("<II", 0, 0)
    data = lzf.compress(raw, len(raw) + len(raw) // 16 + 64)
    assert data is not None
    return struct.pack("<II", len(data), len(raw)) + data


def header_lines(columns: Sequence[Column], num_points: int, data_format: str = "binary_compressed") -> List[str]:
    return [
        "# .PCD v0.7 - Point Cloud Data file format",
        "VERSION 0.7",
        "FIELDS " + " ".join(c[0] for c in columns),
        "SIZE " + " ".join(str(c[2]) for c in columns),
        "TYPE " + " ".join(c[1] for c in columns),
        "COUNT " + " ".join("1" for _ in columns),
        f"WIDTH {num_points}",
        "HEIGHT 1",
        "VIEWPOINT 0 0 0 1 0 0 0",
        f"POINTS {num_points}",
        f"DATA {data_format}",
    ]


def pcd_bytes(
    columns: Sequence[Column],
    *,
    lines: Optional[Sequence[str]] = None,
    data_format: str = "binary_compressed",
    newline: bytes = b"\n",
) -> bytes:
    num_points = len(columns[0][3]) if columns else 0
    if lines is None:
        lines = header_lines(columns, num_points, data_format)
    header = b"".join(ln.encode("ascii") + newline for ln in lines)
    return header + compressed_block(soa_payload(columns))


def sample_columns(n: int = 1000) -> List[Column]:
    i = np.arange(n)
    return [
        ("x", "F", 4, (i % 97) * 0.5),
        ("y", "F", 4, (i % 89) * -0.25),
        ("z", "F", 4, (i % 13) * 0.125),
        ("intensity", "U", 1, i % 256),
        ("ring", "U", 1, i % 32),
    ]


@pytest.fixture
def columns() -> List[Column]:
    return sample_columns()


@pytest.fixture
def write_pcd(tmp_path: Path) -> Callable[..., Path]:
    """Write a PCD file built by `pcd_bytes` and return its path."""
    counter = iter(range(1000))

    def _write(columns: Sequence[Column], **kwargs) -> Path:
        path = tmp_path / f"cloud_{next(counter):03d}.pcd"
        path.write_bytes(pcd_bytes(columns, **kwargs))
        return path

    return _write


@pytest.fixture
def sample_pcd(write_pcd, columns) -> Path:
    return write_pcd(columns)


@pytest.fixture
def make_pcd() -> Callable[..., bytes]:
    return pcd_bytes


@pytest.fixture
def make_block() -> Callable[[bytes], bytes]:
    return compressed_block


@pytest.fixture
def make_header_lines() -> Callable[..., List[str]]:
    return header_lines


@pytest.fixture
def make_payload() -> Callable[[Sequence[Column]], bytes]:
    return soa_payload
