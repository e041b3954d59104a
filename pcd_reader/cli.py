# Copyright 2023 WolkenVision AG. All rights reserved.
"""Inspect a binary_compressed PCD file: header and per-field statistics."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import PcdError
from .fields import FIELD_TYPES
from .logging_config import setup_logging
from .point_cloud import PointCloud

logger = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pcd-inspect",
        description="Print the header of a binary_compressed PCD file and min/max/mean per field",
    )
    p.add_argument(
        "input_pcd",
        type=Path,
        help="input PCD path",
    )
    p.add_argument(
        "-f",
        "--field",
        dest="fields",
        action="append",
        default=None,
        help="field to summarize; repeatable (default: all fields)",
    )
    p.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="logging level (default: WARNING)",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="also write log records to this file",
    )
    return p


def summarize_fields(pc: PointCloud, fields: Optional[Sequence[str]] = None) -> List[str]:
    """One report line per field, decoded with the accessor matching its declaration."""
    names = list(fields) if fields else list(pc.field_names)
    lines: List[str] = []
    for name in names:
        if name not in pc.field_names:
            lines.append(f"  {name}: not in point cloud")
            continue
        i = pc.field_names.index(name)
        tag, size = pc.type_list[i], pc.size_list[i]
        field_type = FIELD_TYPES.get((tag, size))
        if field_type is None:
            lines.append(f"  {name}: {tag}{size} skipped (unsupported type)")
            continue
        data = pc.get_data(name, field_type)
        if data.size == 0:
            lines.append(f"  {name}: {field_type.name}, empty")
            continue
        lines.append(
            f"  {name}: {field_type.name}, min={data.min()}, max={data.max()}, mean={float(data.mean()):.4f}"
        )
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = get_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    input_path = args.input_pcd
    if not input_path.exists():
        raise SystemExit(f"input file does not exist: {input_path}")

    try:
        pc = PointCloud.from_path(input_path)
    except PcdError as e:
        logger.error("failed to load %s: %s", input_path, e)
        raise SystemExit(f"{type(e).__name__}: {e}") from e

    print(f"Input: {input_path}")
    print(f"Data format: {pc.data_format}")
    print(f"Point count: {pc.num_points}")
    print(f"Payload: {len(pc.decompressed_buffer)} bytes")
    print("Fields:")
    for name, tag, size in zip(pc.field_names, pc.type_list, pc.size_list):
        print(f"  {name} {tag}{size}")
    print("Statistics:")
    for line in summarize_fields(pc, args.fields):
        print(line)


if __name__ == "__main__":
    main()
