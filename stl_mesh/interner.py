"""
Exact-value vertex deduplication.

Points are identified by the bit pattern of their three little-endian
float32 coordinates, so two vertices share an index only when they are
bitwise identical. There is no tolerance: ``0.0`` and ``-0.0`` stay
distinct, identical NaN payloads collapse.
"""

from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .constants import POINT_DTYPE


def point_key(point) -> bytes:
    """Canonical dedup key of a single (x, y, z) point."""
    return np.asarray(point, dtype=POINT_DTYPE).reshape(3).tobytes()


class VertexInterner:
    """
    Assigns dense, first-seen, zero-based indices to distinct points.

    A single insertion-ordered dict maps the canonical key to the index, so
    the unique-point sequence is the dict order and the index of a point
    never changes once assigned.
    """

    def __init__(self):
        self._index: Optional[Dict[bytes, int]] = {}

    def __len__(self) -> int:
        return len(self._index) if self._index is not None else 0

    def __contains__(self, point) -> bool:
        return self._index is not None and point_key(point) in self._index

    @property
    def released(self) -> bool:
        return self._index is None

    def _map(self) -> Dict[bytes, int]:
        if self._index is None:
            raise RuntimeError("VertexInterner has been released")
        return self._index

    def intern(self, point: Sequence[float]) -> Tuple[int, bool]:
        """
        Look up a point, assigning the next index if it is new.

        Returns:
            Tuple of (index, is_new)
        """
        index_map = self._map()
        key = point_key(point)
        index = index_map.get(key)
        if index is None:
            index = len(index_map)
            index_map[key] = index
            return index, True
        return index, False

    def intern_block(self, vertices: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Intern an (n, 3) block of points in row order.

        Equivalent to calling :meth:`intern` on every row in turn. Duplicates
        inside the block are collapsed with ``numpy.unique`` first so the
        dict is only consulted once per distinct point in the block.

        Returns:
            Tuple of (indices, new_points): an int64 array of shape (n,) and
            the newly assigned points, shape (m, 3), in index order
        """
        index_map = self._map()
        block = np.ascontiguousarray(vertices, dtype=POINT_DTYPE).reshape(-1, 3)
        if len(block) == 0:
            return np.empty(0, dtype=np.int64), np.empty((0, 3), dtype=POINT_DTYPE)

        # Rows compared by raw bits, not float value
        bits = block.view('<u4')
        _, first, inverse = np.unique(bits, axis=0, return_index=True, return_inverse=True)
        inverse = inverse.reshape(-1)

        assigned = np.empty(len(first), dtype=np.int64)
        new_rows = []
        for u in np.argsort(first, kind='stable'):
            row = first[u]
            key = block[row].tobytes()
            index = index_map.get(key)
            if index is None:
                index = len(index_map)
                index_map[key] = index
                new_rows.append(row)
            assigned[u] = index

        return assigned[inverse], block[np.asarray(new_rows, dtype=np.int64)]

    def release(self) -> None:
        """Drop the key map. Safe to call more than once."""
        if self._index is not None:
            self._index.clear()
            self._index = None
