"""Shared fixtures: synthetic binary and ASCII STL files."""

import struct

import pytest


def make_binary_stl(triangles, header=b"", count=None, trailing=b""):
    """Build binary STL bytes.

    Each triangle is (normal, v1, v2, v3), each a 3-tuple of floats.
    """
    data = header.ljust(80, b"\x00")[:80]
    data += struct.pack("<I", len(triangles) if count is None else count)
    for normal, v1, v2, v3 in triangles:
        data += struct.pack("<3f", *normal)
        data += struct.pack("<3f", *v1)
        data += struct.pack("<3f", *v2)
        data += struct.pack("<3f", *v3)
        data += struct.pack("<H", 0)
    return data + trailing


def make_ascii_stl(triangles, name="test"):
    lines = [f"solid {name}"]
    for normal, v1, v2, v3 in triangles:
        lines.append("  facet normal {} {} {}".format(*normal))
        lines.append("    outer loop")
        for v in (v1, v2, v3):
            lines.append("      vertex {} {} {}".format(*v))
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


# Unit square in z=0 split into two triangles sharing an edge
SQUARE = [
    ((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    ((0.0, 0.0, 1.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)),
]

# Closed tetrahedron: 4 triangles, 4 shared corners
TETRAHEDRON = [
    ((0.0, 0.0, -1.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 0.0, 0.0)),
    ((0.0, -1.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    ((-1.0, 0.0, 0.0), (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0)),
    ((0.5773, 0.5773, 0.5773), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
]


@pytest.fixture
def write_binary(tmp_path):
    def _write(triangles, name="model.stl", **kwargs):
        path = tmp_path / name
        path.write_bytes(make_binary_stl(triangles, **kwargs))
        return path
    return _write


@pytest.fixture
def write_ascii(tmp_path):
    def _write(triangles, name="model_ascii.stl", **kwargs):
        path = tmp_path / name
        path.write_text(make_ascii_stl(triangles, **kwargs))
        return path
    return _write
