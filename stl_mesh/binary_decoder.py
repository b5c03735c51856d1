"""
Binary STL decoding.

Layout: 80-byte header (ignored), uint32 triangle count, then per triangle
a float32 normal, three float32 vertices and a 2-byte attribute field
(ignored). All fields are little-endian.

Only call this on files known to be binary. An ASCII file read this way
takes its first bytes as the triangle count, which usually declares far
more records than the file holds and fails as truncated; :func:`load_stl`
detects the variant first.
"""

import os

from .constants import BINARY_PREFIX_SIZE, BINARY_RECORD_SIZE, FORMAT_BINARY
from .exceptions import LoadError
from .mesh import Mesh
from .records import iter_binary_blocks, read_binary_prefix


def decode_binary(context) -> Mesh:
    """
    Decode a binary STL file into a Mesh.

    Args:
        context: DecodeContext owning the interner and assembler for this call

    Returns:
        The fully populated Mesh

    Raises:
        LoadError: On I/O failure or when the file is shorter than the
            declared triangle count requires
    """
    path = context.path
    config = context.config
    log = context.logger

    try:
        with open(path, 'rb') as fh:
            file_size = os.fstat(fh.fileno()).st_size
            _, triangle_count = read_binary_prefix(fh, path)

            expected = BINARY_PREFIX_SIZE + BINARY_RECORD_SIZE * triangle_count
            if file_size < expected:
                raise LoadError(
                    f"Binary STL truncated: {triangle_count} triangles need {expected} bytes, "
                    f"file has {file_size} [{path}]",
                    path=path,
                )
            if file_size > expected and config.warn_on_trailing_bytes:
                log.warning(
                    f"Binary STL has {file_size - expected} trailing bytes after "
                    f"{triangle_count} triangles: {path}"
                )

            log.debug(f"Reading {triangle_count} triangles from {path}")
            for normals, vertices in iter_binary_blocks(fh, triangle_count, config.chunk_triangles, path):
                context.assembler.add_triangles(normals, vertices)
                log.debug(
                    f"Processed {context.assembler.triangle_count}/{triangle_count} triangles, "
                    f"{context.assembler.point_count} unique points"
                )
    except OSError as e:
        raise LoadError(f"Error loading binary STL [{path}]", path=path, cause=e) from e

    return context.assembler.build(FORMAT_BINARY)
