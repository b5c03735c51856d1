"""
ASCII STL decoding.

Line-oriented: every line containing ``facet`` opens a triangle made of the
normal on that line, an ignored ``outer loop`` line, three ``vertex`` lines
and two ignored closing lines (``endloop``, ``endfacet``). Anything else,
``solid`` / ``endsolid`` included, is skipped. The file is never checked for
full standard compliance.
"""

from typing import List

import numpy as np

from .constants import (
    ASCII_FACET_TOKEN,
    ASCII_NORMAL_KEYWORDS,
    ASCII_SOLID_TOKEN,
    ASCII_VERTEX_KEYWORDS,
    FORMAT_ASCII,
)
from .exceptions import LoadError
from .mesh import Mesh
from .records import parse_float_triple


class _TriangleBuffer:
    """Collects parsed triangles until a block is handed to the assembler."""

    def __init__(self, assembler, size: int):
        self.assembler = assembler
        self.size = size
        self.normals: List[np.ndarray] = []
        self.vertices: List[np.ndarray] = []

    def append(self, normal, v1, v2, v3):
        self.normals.append(normal)
        self.vertices.extend((v1, v2, v3))
        if len(self.normals) >= self.size:
            self.flush()

    def flush(self):
        if self.normals:
            self.assembler.add_triangles(np.stack(self.normals), np.stack(self.vertices))
            self.normals, self.vertices = [], []


def decode_ascii(context) -> Mesh:
    """
    Decode an ASCII STL file into a Mesh.

    Binary content passed here yields a degenerate mesh or a LoadError.

    Args:
        context: DecodeContext owning the interner and assembler for this call

    Returns:
        The fully populated Mesh

    Raises:
        LoadError: On I/O failure, when the first non-empty line does not
            start with ``solid``, or when a numeric token cannot be parsed
    """
    path = context.path
    config = context.config
    buffer = _TriangleBuffer(context.assembler, config.chunk_triangles)
    line_no = 0

    def next_line(f):
        nonlocal line_no
        line_no += 1
        return f.readline()

    try:
        with open(path, 'r', encoding=config.encoding, errors='replace') as f:
            first = next_line(f)
            while first and not first.strip():
                first = next_line(f)
            if not first.lstrip().startswith(ASCII_SOLID_TOKEN):
                raise LoadError(f"Invalid ASCII STL ({path})", path=path)

            line = next_line(f)
            while line:
                if ASCII_FACET_TOKEN in line.lower():
                    normal = parse_float_triple(line, ASCII_NORMAL_KEYWORDS)
                    next_line(f)  # outer loop
                    v1 = parse_float_triple(next_line(f), ASCII_VERTEX_KEYWORDS)
                    v2 = parse_float_triple(next_line(f), ASCII_VERTEX_KEYWORDS)
                    v3 = parse_float_triple(next_line(f), ASCII_VERTEX_KEYWORDS)
                    buffer.append(normal, v1, v2, v3)
                    next_line(f)  # endloop
                    next_line(f)  # endfacet
                line = next_line(f)
            buffer.flush()
    except ValueError as e:
        raise LoadError(f"Error loading ASCII STL [{path}] at line {line_no}", path=path, cause=e) from e
    except (OSError, LookupError) as e:
        raise LoadError(f"Error loading ASCII STL [{path}]", path=path, cause=e) from e

    context.logger.debug(f"Parsed {context.assembler.triangle_count} facets from {line_no} lines: {path}")
    return context.assembler.build(FORMAT_ASCII)
