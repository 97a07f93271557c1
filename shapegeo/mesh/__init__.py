"""Mesh module - procedural shape buffers with pos/normal/uv layout."""

from .layout import (
    VertexAttribType,
    VertexAttribute,
    VertexLayout,
    mesh3_vertex_layout,
    index_dtype_for,
)
from .buffers import BufferSink, MeshBuffers, MeshInvariantError, check_buffers, pack_indices
from .geometry import ShapeGeometry
from .sphere import SphereGeometry, SphereParameters, sample_sphere_grid, triangulate_sphere_grid
from .primitives import BoxGeometry, PlaneGeometry, CylinderGeometry
from .batch import generate_spheres, build_sphere_buffers

__all__ = [
    "VertexAttribType",
    "VertexAttribute",
    "VertexLayout",
    "mesh3_vertex_layout",
    "index_dtype_for",
    "BufferSink",
    "MeshBuffers",
    "MeshInvariantError",
    "check_buffers",
    "pack_indices",
    "ShapeGeometry",
    "SphereGeometry",
    "SphereParameters",
    "sample_sphere_grid",
    "triangulate_sphere_grid",
    "BoxGeometry",
    "PlaneGeometry",
    "CylinderGeometry",
    "generate_spheres",
    "build_sphere_buffers",
]
