"""Vertex layout definitions and index width selection."""

import numpy as np
from enum import Enum

# GPU COMPATIBILITY

UINT16_CAPACITY = 1 << 16
UINT32_CAPACITY = 1 << 32


class VertexAttribType(Enum):
    FLOAT32 = "float32"
    INT32 = "int32"
    UINT32 = "uint32"


class VertexAttribute:
    def __init__(self, name, size, vtype: VertexAttribType, offset):
        self.name = name
        self.size = size
        self.vtype = vtype
        self.offset = offset

    def __repr__(self):
        return f"VertexAttribute({self.name!r}, {self.size}, {self.vtype.value}, offset={self.offset})"


class VertexLayout:
    def __init__(self, stride, attributes):
        self.stride = stride    # размер одной вершины в байтах
        self.attributes = attributes  # список VertexAttribute

    @property
    def floats_per_vertex(self) -> int:
        return self.stride // 4

    def attribute(self, name: str) -> VertexAttribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(name)


def mesh3_vertex_layout() -> VertexLayout:
    """Get vertex layout for Mesh3: pos(3) + normal(3) + uv(2)."""
    return VertexLayout(
        stride=8 * 4,
        attributes=[
            VertexAttribute("position", 3, VertexAttribType.FLOAT32, 0),
            VertexAttribute("normal",   3, VertexAttribType.FLOAT32, 12),
            VertexAttribute("uv",       2, VertexAttribType.FLOAT32, 24),
        ]
    )


def index_dtype_for(vertex_count: int):
    """
    Smallest GPU index type addressing `vertex_count` rows.

    uint16 while every row index fits 16 bits, uint32 above that.
    Returns None when even uint32 is not enough.
    """
    if vertex_count <= UINT16_CAPACITY:
        return np.uint16
    if vertex_count <= UINT32_CAPACITY:
        return np.uint32
    return None
