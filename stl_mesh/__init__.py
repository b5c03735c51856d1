"""
stl_mesh - STL triangle mesh loader

Decodes binary and ASCII STL files into an indexed mesh:
- Format detection from the second line of the file
- Streamed binary records, line-oriented ASCII parsing
- Exact bit-pattern vertex deduplication in first-seen order
- Per-face normals and a placeholder texture coordinate
"""

from .config import LoaderConfig, load_config
from .exceptions import ConfigurationError, LoadError, StlMeshError
from .mesh import Mesh
from .stl_processor import STLProcessor, load_ascii_stl, load_binary_stl, load_stl, release

__version__ = "1.0.0"
__all__ = [
    "STLProcessor",
    "Mesh",
    "LoaderConfig",
    "load_config",
    "load_stl",
    "load_binary_stl",
    "load_ascii_stl",
    "release",
    "StlMeshError",
    "LoadError",
    "ConfigurationError",
]
