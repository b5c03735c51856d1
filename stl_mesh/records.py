"""
Numeric record reading for both STL variants.

Binary records are streamed from an open file in blocks using a numpy
structured dtype; ASCII records are keyword-prefixed lines holding three
floats. Every value is decoded as a little-endian 32-bit float.
"""

import struct
from fractions import Fraction
from typing import BinaryIO, Iterator, Sequence, Tuple

import numpy as np

from .constants import (
    BINARY_HEADER_SIZE,
    BINARY_RECORD_DTYPE,
    POINT_DTYPE,
    TRIANGLE_COUNT_SIZE,
)
from .exceptions import LoadError


def read_binary_prefix(fh: BinaryIO, path=None) -> Tuple[bytes, int]:
    """
    Read the 80-byte header and the triangle count.

    Args:
        fh: Binary file handle positioned at the start of the file
        path: File path used in error messages

    Returns:
        Tuple of (header bytes, declared triangle count)
    """
    header = fh.read(BINARY_HEADER_SIZE)
    count_bytes = fh.read(TRIANGLE_COUNT_SIZE)
    if len(header) < BINARY_HEADER_SIZE or len(count_bytes) < TRIANGLE_COUNT_SIZE:
        raise LoadError(
            f"Binary STL too short to hold header and triangle count [{path}]",
            path=path,
        )
    count = struct.unpack('<I', count_bytes)[0]
    return header, count


def iter_binary_blocks(fh: BinaryIO, triangle_count: int, chunk_triangles: int,
                       path=None) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
    """
    Stream triangle records in blocks of at most ``chunk_triangles``.

    Yields:
        (normals, vertices) where normals has shape (k, 3) and vertices has
        shape (3k, 3) ordered vertex1, vertex2, vertex3 per triangle

    Raises:
        LoadError: If the file ends before ``triangle_count`` records
    """
    remaining = triangle_count
    read_so_far = 0
    while remaining > 0:
        wanted = min(chunk_triangles, remaining)
        records = np.fromfile(fh, dtype=BINARY_RECORD_DTYPE, count=wanted)
        if len(records) < wanted:
            raise LoadError(
                f"Binary STL truncated: declared {triangle_count} triangles, "
                f"found {read_so_far + len(records)} [{path}]",
                path=path,
            )
        normals = np.ascontiguousarray(records['normal'])
        vertices = np.ascontiguousarray(records['vertices']).reshape(-1, 3)
        read_so_far += wanted
        remaining -= wanted
        yield normals, vertices


def parse_float_triple(line: str, keywords: Sequence[str]) -> np.ndarray:
    """
    Parse the three floats following the leading keyword tokens of a line.

    Args:
        line: Text line such as ``facet normal 0 0 1`` or ``vertex 1 2 3``
        keywords: Leading tokens to drop (compared case-insensitively)

    Returns:
        float32 array of shape (3,)

    Raises:
        ValueError: If fewer than three numeric tokens follow the keywords
    """
    parts = line.split()
    start = 0
    while start < len(parts) and parts[start].lower() in keywords:
        start += 1
    values = parts[start:start + 3]
    if len(values) < 3:
        raise ValueError(f"expected 3 numbers, got {len(values)} in {line.strip()!r}")
    return np.array([parse_float32(v) for v in values], dtype=POINT_DTYPE)


def parse_float32(token: str) -> np.float32:
    """
    Parse a decimal token to the nearest float32, rounding once.

    Going through a Python float rounds twice (decimal to double, double to
    float32). That only goes wrong when the double lands exactly on the
    midpoint between two float32 neighbours, so that case is settled against
    the exact decimal value.

    Raises:
        ValueError: If the token is not a number
    """
    wide = float(token)
    with np.errstate(over='ignore'):
        narrow = np.float32(wide)
    if not np.isfinite(narrow) or float(narrow) == wide:
        return narrow

    toward = np.float32(np.inf) if wide > float(narrow) else np.float32(-np.inf)
    other = np.nextafter(narrow, toward)
    if not np.isfinite(other):
        return narrow
    midpoint = (float(narrow) + float(other)) / 2
    if wide != midpoint:
        return narrow

    try:
        exact = Fraction(token)
    except ValueError:
        return narrow
    if exact == midpoint:
        # true tie, numpy already rounded half to even
        return narrow
    return narrow if (exact > midpoint) == (float(narrow) > midpoint) else other
