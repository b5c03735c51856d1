"""
Essential constants for the stl_mesh package.

Binary STL layout, ASCII tokens and loader defaults.
"""

import numpy as np

# Binary STL layout
BINARY_HEADER_SIZE = 80
TRIANGLE_COUNT_SIZE = 4
BINARY_PREFIX_SIZE = BINARY_HEADER_SIZE + TRIANGLE_COUNT_SIZE
BINARY_RECORD_SIZE = 50  # 12 normal + 36 vertices + 2 attribute

# Per-triangle record: normal, 3 vertices, attribute byte count
BINARY_RECORD_DTYPE = np.dtype([
    ('normal', '<f4', (3,)),
    ('vertices', '<f4', (3, 3)),
    ('attribute', '<u2'),
])

# ASCII tokens
ASCII_SOLID_TOKEN = "solid"
ASCII_FACET_TOKEN = "facet"
ASCII_NORMAL_KEYWORDS = ("facet", "normal")
ASCII_VERTEX_KEYWORDS = ("vertex",)

# Output layout
POINT_DTYPE = np.dtype('<f4')
FACE_DTYPE = np.dtype(np.int32)
PLACEHOLDER_TEX_COORD = (0.0, 0.0)
FACE_RECORD_WIDTH = 9  # (point, normal, texcoord) x 3

FORMAT_BINARY = "binary"
FORMAT_ASCII = "ascii"

# Loader defaults
DEFAULT_CHUNK_TRIANGLES = 65536
DEFAULT_TEXT_ENCODING = "utf-8"

# Longest line the format probe reads; a longer first line means binary
DETECT_LINE_LIMIT = 4096
