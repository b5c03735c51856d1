"""
STL loading entry points.

``STLProcessor.load_stl`` detects the variant and routes to the matching
decoder. Callers who already know the variant can call
``load_binary_stl`` / ``load_ascii_stl`` directly and skip the probe.

Dedup state lives in a ``DecodeContext`` created for each call and released
when the call returns, so independent decodes never share state and can run
on separate threads.
"""

import gc
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from .ascii_decoder import decode_ascii
from .binary_decoder import decode_binary
from .config import LoaderConfig
from .constants import FORMAT_ASCII
from .detector import detect_format
from .interner import VertexInterner
from .mesh import Mesh, MeshAssembler

PathLike = Union[str, Path]


@dataclass
class DecodeContext:
    """Working state owned by a single decode call."""
    path: Path
    config: LoaderConfig
    logger: logging.Logger
    interner: VertexInterner = field(default_factory=VertexInterner)
    assembler: Optional[MeshAssembler] = None

    def __post_init__(self):
        if self.assembler is None:
            self.assembler = MeshAssembler(self.interner, self.logger)

    def release(self) -> None:
        self.interner.release()
        self.assembler = None


class STLProcessor:
    """
    STL loader handling both ASCII and binary files.

    Produces an indexed :class:`Mesh` with exact vertex deduplication,
    per-face normals and a placeholder texture coordinate.
    """

    def __init__(self, config: Optional[LoaderConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or LoaderConfig()
        self.logger = logger or logging.getLogger(__name__)

    def load_stl(self, path: PathLike) -> Mesh:
        """
        Load an STL file of unknown variant.

        Args:
            path: Path to the STL file

        Returns:
            Mesh ready for rendering

        Raises:
            LoadError: If detection or decoding fails
        """
        kind = detect_format(path, self.config.encoding)
        if kind == FORMAT_ASCII:
            return self.load_ascii_stl(path)
        return self.load_binary_stl(path)

    def load_binary_stl(self, path: PathLike) -> Mesh:
        """
        Load a binary STL file.

        Normals are passed through unchanged (NaN and zero vectors included);
        the header and per-facet attribute bytes are ignored. Do not use on
        ASCII files; use :meth:`load_stl` when in doubt.
        """
        return self._decode(path, decode_binary)

    def load_ascii_stl(self, path: PathLike) -> Mesh:
        """
        Load an ASCII STL file.

        A binary file loaded this way gives a degenerate mesh or a LoadError.
        """
        return self._decode(path, decode_ascii)

    def _decode(self, path: PathLike, decoder: Callable[[DecodeContext], Mesh]) -> Mesh:
        context = DecodeContext(path=Path(path), config=self.config, logger=self.logger)
        start = time.perf_counter()
        try:
            mesh = decoder(context)
        finally:
            context.release()

        self.logger.info(
            f"Loaded {mesh.source_format} STL {path}: {mesh.triangle_count} triangles, "
            f"{mesh.point_count} unique points in {time.perf_counter() - start:.3f}s"
        )
        return mesh

    def release(self, request_immediate_reclaim: bool = False) -> None:
        """
        Advisory cleanup: optionally force a GC pass.

        Every decode call drops its own dedup maps on return, so nothing is
        held between calls and a decode running on another thread is never
        touched. What remains is the optional reclamation pass.

        Args:
            request_immediate_reclaim: Run ``gc.collect()``
        """
        if request_immediate_reclaim:
            collected = gc.collect()
            self.logger.debug(f"Release requested, collected {collected} objects")
        else:
            self.logger.debug("Release requested, no decode state held between calls")


def load_stl(path: PathLike, config: Optional[LoaderConfig] = None) -> Mesh:
    """Load an STL file of unknown variant with a fresh processor."""
    return STLProcessor(config).load_stl(path)


def load_binary_stl(path: PathLike, config: Optional[LoaderConfig] = None) -> Mesh:
    """Load a binary STL file with a fresh processor."""
    return STLProcessor(config).load_binary_stl(path)


def load_ascii_stl(path: PathLike, config: Optional[LoaderConfig] = None) -> Mesh:
    """Load an ASCII STL file with a fresh processor."""
    return STLProcessor(config).load_ascii_stl(path)


def release(request_immediate_reclaim: bool = False) -> None:
    """Module-level release; loads through the functions above keep no state."""
    if request_immediate_reclaim:
        gc.collect()
