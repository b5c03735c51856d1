"""
Indexed triangle mesh produced by the decoders.

Layout follows the point/normal/texcoord face convention used by scene-graph
triangle meshes: every face is nine ints, three (point, normal, texcoord)
index triples, one per vertex.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from .constants import FACE_DTYPE, FACE_RECORD_WIDTH, PLACEHOLDER_TEX_COORD, POINT_DTYPE
from .interner import VertexInterner


@dataclass(eq=False)
class Mesh:
    """
    Decoded STL geometry.

    Attributes:
        points: Flat float32 array of unique points (x, y, z, ...) in index order
        normals: Flat float32 array with one normal per triangle
        tex_coords: Flat float32 array holding the single (0, 0) placeholder
        faces: Flat int32 array, nine values per triangle
        source_format: "binary" or "ascii"
    """
    points: np.ndarray
    normals: np.ndarray
    tex_coords: np.ndarray
    faces: np.ndarray
    source_format: str

    @property
    def point_count(self) -> int:
        return len(self.points) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.faces) // FACE_RECORD_WIDTH

    def point_array(self) -> np.ndarray:
        """Unique points as an (U, 3) view."""
        return self.points.reshape(-1, 3)

    def normal_array(self) -> np.ndarray:
        """Per-triangle normals as a (T, 3) view."""
        return self.normals.reshape(-1, 3)

    def face_array(self) -> np.ndarray:
        """Faces as a (T, 3, 3) view of (point, normal, texcoord) per vertex."""
        return self.faces.reshape(-1, 3, 3)

    def face_point_indices(self) -> np.ndarray:
        """Point indices of every triangle, shape (T, 3)."""
        return self.face_array()[:, :, 0]

    def summary(self) -> Dict[str, Any]:
        triangles = self.triangle_count
        return {
            "format": self.source_format,
            "triangles": triangles,
            "unique_points": self.point_count,
            "vertex_occurrences": 3 * triangles,
            "dedup_ratio": (self.point_count / (3 * triangles)) if triangles else 0.0,
        }


class MeshAssembler:
    """
    Accumulates triangle blocks into a Mesh.

    Normals are stored verbatim, vertices go through the interner, and each
    face references the ordinal of its own triangle as normal index.
    """

    def __init__(self, interner: VertexInterner, logger: Optional[logging.Logger] = None):
        self.interner = interner
        self.logger = logger or logging.getLogger(__name__)
        self._points: List[np.ndarray] = []
        self._normals: List[np.ndarray] = []
        self._faces: List[np.ndarray] = []
        self.point_count = 0
        self.triangle_count = 0

    def add_triangles(self, normals: np.ndarray, vertices: np.ndarray) -> None:
        """
        Append a block of triangles.

        Args:
            normals: (k, 3) per-triangle normals
            vertices: (3k, 3) vertices, vertex1, vertex2, vertex3 per triangle
        """
        normals = np.asarray(normals, dtype=POINT_DTYPE).reshape(-1, 3)
        k = len(normals)
        if k == 0:
            return
        vertices = np.asarray(vertices, dtype=POINT_DTYPE).reshape(-1, 3)
        if len(vertices) != 3 * k:
            raise ValueError(f"expected {3 * k} vertices for {k} triangles, got {len(vertices)}")

        indices, new_points = self.interner.intern_block(vertices)

        faces = np.zeros((k, FACE_RECORD_WIDTH), dtype=FACE_DTYPE)
        faces[:, 0::3] = indices.reshape(k, 3)
        faces[:, 1::3] = np.arange(self.triangle_count, self.triangle_count + k)[:, None]

        self._normals.append(normals.ravel())
        self._points.append(new_points.ravel())
        self._faces.append(faces.ravel())
        self.point_count += len(new_points)
        self.triangle_count += k

    def build(self, source_format: str) -> Mesh:
        """Concatenate the accumulated blocks into the final Mesh."""
        points = np.concatenate(self._points) if self._points else np.empty(0, dtype=POINT_DTYPE)
        normals = np.concatenate(self._normals) if self._normals else np.empty(0, dtype=POINT_DTYPE)
        faces = np.concatenate(self._faces) if self._faces else np.empty(0, dtype=FACE_DTYPE)

        if not self.interner.released and len(self.interner) != len(points) // 3:
            self.logger.warning(
                f"MeshAssembler.build: unique points != mesh points ({len(self.interner)}, {len(points) // 3})"
            )

        self._points, self._normals, self._faces = [], [], []
        return Mesh(
            points=points,
            normals=normals,
            tex_coords=np.array(PLACEHOLDER_TEX_COORD, dtype=POINT_DTYPE),
            faces=faces,
            source_format=source_format,
        )
