"""Base for procedural shapes that produce an attribute layout and index buffer."""

from __future__ import annotations

import hashlib
from typing import Optional, Tuple

import numpy as np

from shapegeo import log
from .buffers import BufferSink, MeshBuffers, check_buffers, pack_indices
from .layout import VertexLayout, mesh3_vertex_layout


def _primitive_uuid(name: str, *args) -> str:
    """Compute UUID for primitive from name and parameters."""
    key = f"{name}:{':'.join(str(a) for a in args)}"
    return hashlib.sha256(key.encode()).hexdigest()[:16]


class ShapeGeometry:
    """
    Shape that generates interleaved pos(3) + normal(3) + uv(2) vertices
    and triangle indices once, at construction.

    Subclasses normalize their parameters, then call `_initialize`.
    The finished buffers stay on `self.buffers` and, when a sink was
    given, are passed to it exactly once.
    """

    name = "Shape"

    def __init__(self, sink: Optional[BufferSink] = None):
        self._sink = sink
        self.buffers: Optional[MeshBuffers] = None

    def parameters(self) -> Tuple:
        """Normalized parameters that fully determine the generated buffers."""
        raise NotImplementedError("parameters must be implemented in subclasses.")

    def expected_vertex_count(self) -> Optional[int]:
        return None

    def get_vertex_layout(self) -> VertexLayout:
        return mesh3_vertex_layout()

    @property
    def key(self) -> str:
        return _primitive_uuid(type(self).__name__, *self.parameters())

    def _initialize(self, vertices: np.ndarray, indices) -> MeshBuffers:
        vertex_count = vertices.size // self.get_vertex_layout().floats_per_vertex
        packed = pack_indices(indices, vertex_count)
        buffers = MeshBuffers(vertices, packed, self.get_vertex_layout())
        check_buffers(buffers, self.expected_vertex_count())
        self.buffers = buffers

        log.debug(
            f"[{self.name}] generated {buffers.vertex_count} vertices, "
            f"{buffers.triangle_count} triangles ({packed.dtype})"
        )

        if self._sink is not None:
            self._sink(buffers.vertices, buffers.indices)
        return buffers
