"""CPU-side vertex/index buffers handed to the mesh owner."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from shapegeo import log
from .layout import VertexLayout, index_dtype_for, mesh3_vertex_layout


# Внешний владелец буферов: получает (vertices, indices) ровно один раз.
BufferSink = Callable[[np.ndarray, np.ndarray], None]


class MeshInvariantError(AssertionError):
    """Generated buffers break their own contract. Always a generator bug."""


class MeshBuffers:
    """
    Interleaved attribute buffer plus triangle index buffer.

    vertices - flat float32 array, `layout.floats_per_vertex` scalars per row
    indices  - flat uint16/uint32 array, three entries per triangle
    """

    __slots__ = ("vertices", "indices", "layout")

    def __init__(self, vertices: np.ndarray, indices: np.ndarray, layout: Optional[VertexLayout] = None):
        self.layout = layout or mesh3_vertex_layout()
        self.vertices = vertices
        self.indices = indices

    @property
    def vertex_count(self) -> int:
        return self.vertices.size // self.layout.floats_per_vertex

    @property
    def triangle_count(self) -> int:
        return self.indices.size // 3

    def rows(self) -> np.ndarray:
        """Vertex buffer as a (vertex_count, floats_per_vertex) view."""
        return self.vertices.reshape(-1, self.layout.floats_per_vertex)

    def _view(self, name: str) -> np.ndarray:
        attr = self.layout.attribute(name)
        start = attr.offset // 4
        return self.rows()[:, start:start + attr.size]

    @property
    def positions(self) -> np.ndarray:
        return self._view("position")

    @property
    def normals(self) -> np.ndarray:
        return self._view("normal")

    @property
    def uvs(self) -> np.ndarray:
        return self._view("uv")

    @property
    def triangles(self) -> np.ndarray:
        return self.indices.reshape(-1, 3)

    def __repr__(self):
        return (
            f"MeshBuffers(vertices={self.vertex_count}, triangles={self.triangle_count}, "
            f"index_dtype={self.indices.dtype})"
        )


def pack_indices(indices, vertex_count: int) -> np.ndarray:
    """Convert a python index list into the narrowest fitting GPU index array."""
    dtype = index_dtype_for(vertex_count)
    if dtype is None:
        _fail(f"{vertex_count} vertices exceed uint32 index capacity")
    wide = np.asarray(indices, dtype=np.int64)
    # bounds are checked on int64, before narrowing
    if wide.size and (int(wide.min()) < 0 or int(wide.max()) >= vertex_count):
        _fail(f"index range [{int(wide.min())}, {int(wide.max())}] out of range for {vertex_count} vertices")
    return wide.astype(dtype)


def check_buffers(buffers: MeshBuffers, expected_vertex_count: Optional[int] = None):
    """Validate buffer shapes and index bounds. Raises MeshInvariantError."""
    fpv = buffers.layout.floats_per_vertex
    if buffers.vertices.ndim != 1 or buffers.vertices.size % fpv != 0:
        _fail(f"vertex buffer size {buffers.vertices.size} is not a multiple of {fpv}")

    count = buffers.vertex_count
    if expected_vertex_count is not None and count != expected_vertex_count:
        _fail(f"vertex buffer holds {count} rows, expected {expected_vertex_count}")

    if buffers.indices.ndim != 1 or buffers.indices.size % 3 != 0:
        _fail(f"index buffer length {buffers.indices.size} is not a multiple of 3")

    dtype = index_dtype_for(count)
    if dtype is None or np.iinfo(buffers.indices.dtype).max < count - 1:
        _fail(f"index type {buffers.indices.dtype} cannot address {count} vertices")

    if buffers.indices.size and int(buffers.indices.max()) >= count:
        _fail(f"index {int(buffers.indices.max())} out of range for {count} vertices")


def _fail(message: str):
    log.error(f"[MeshBuffers] {message}")
    raise MeshInvariantError(message)
