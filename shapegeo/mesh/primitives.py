"""Primitive shapes sharing the sphere's buffer layout: Box, Plane, Cylinder."""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from .buffers import BufferSink
from .geometry import ShapeGeometry


def _pack_rows(rows: List[Tuple[float, ...]]) -> np.ndarray:
    return np.asarray(rows, dtype=np.float32).reshape(-1)


# (normal, u axis, v axis); u x v == normal so quads come out CCW from outside
_BOX_FACES = (
    ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
    ((-1, 0, 0), (0, 0, 1), (0, 1, 0)),
    ((0, 1, 0), (1, 0, 0), (0, 0, -1)),
    ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    ((0, 0, 1), (1, 0, 0), (0, 1, 0)),
    ((0, 0, -1), (-1, 0, 0), (0, 1, 0)),
)

_QUAD_CORNERS = ((-1, -1), (1, -1), (1, 1), (-1, 1))


class BoxGeometry(ShapeGeometry):
    """Axis-aligned box centered at the origin, four vertices per face."""

    name = "Box"

    def __init__(self, width: float = 1.0, height: float = None, depth: float = None,
                 sink: Optional[BufferSink] = None):
        super().__init__(sink)
        if height is None:
            height = width
        if depth is None:
            depth = width
        self.width = width
        self.height = height
        self.depth = depth
        self.initialize()

    def parameters(self) -> Tuple:
        return (self.width, self.height, self.depth)

    def expected_vertex_count(self) -> int:
        return 24

    def initialize(self):
        half = (self.width * 0.5, self.height * 0.5, self.depth * 0.5)
        rows = []
        indices = []
        for normal, u_axis, v_axis in _BOX_FACES:
            base = len(rows)
            for s, t in _QUAD_CORNERS:
                position = tuple(
                    (normal[k] + s * u_axis[k] + t * v_axis[k]) * half[k] for k in range(3)
                )
                rows.append(position + normal + ((s + 1) * 0.5, (t + 1) * 0.5))
            indices.extend((base, base + 1, base + 2))
            indices.extend((base, base + 2, base + 3))
        self._initialize(_pack_rows(rows), indices)


class PlaneGeometry(ShapeGeometry):
    """Subdivided plane in XZ, facing +Y."""

    name = "Plane"

    def __init__(self, width: float = 1.0, depth: float = 1.0, segments_w: int = 1, segments_d: int = 1,
                 sink: Optional[BufferSink] = None):
        super().__init__(sink)
        self.width = width
        self.depth = depth
        self.segments_w = max(1, math.floor(segments_w))
        self.segments_d = max(1, math.floor(segments_d))
        self.initialize()

    def parameters(self) -> Tuple:
        return (self.width, self.depth, self.segments_w, self.segments_d)

    def expected_vertex_count(self) -> int:
        return (self.segments_w + 1) * (self.segments_d + 1)

    def initialize(self):
        rows = []
        indices = []
        for d in range(self.segments_d + 1):
            fd = d / self.segments_d
            z = (fd - 0.5) * self.depth
            for w in range(self.segments_w + 1):
                fw = w / self.segments_w
                x = (fw - 0.5) * self.width
                rows.append((x, 0.0, z, 0.0, 1.0, 0.0, fw, 1.0 - fd))
        for d in range(self.segments_d):
            for w in range(self.segments_w):
                v0 = d * (self.segments_w + 1) + w
                v1 = v0 + 1
                v2 = v0 + (self.segments_w + 1)
                v3 = v2 + 1
                indices.extend((v0, v2, v1))
                indices.extend((v1, v2, v3))
        self._initialize(_pack_rows(rows), indices)


class CylinderGeometry(ShapeGeometry):
    """
    Capped cylinder along Y, centered at the origin.

    The side keeps a duplicated seam column so u can run 0..1.
    Caps have their own vertices with flat +-Y normals.
    """

    name = "Cylinder"

    def __init__(self, radius: float = 1.0, height: float = 1.0, segments: int = 16,
                 sink: Optional[BufferSink] = None):
        super().__init__(sink)
        self.radius = radius
        self.height = height
        self.segments = max(3, math.floor(segments))
        self.initialize()

    def parameters(self) -> Tuple:
        return (self.radius, self.height, self.segments)

    def expected_vertex_count(self) -> int:
        return 4 * (self.segments + 1)

    def initialize(self):
        segments = self.segments
        half_height = self.height * 0.5
        rows = []
        indices = []

        # side: bottom ring then top ring, seam column duplicated
        for y, v in ((-half_height, 0.0), (half_height, 1.0)):
            for s in range(segments + 1):
                theta = s * 2 * math.pi / segments
                c = math.cos(theta)
                sn = math.sin(theta)
                rows.append((self.radius * c, y, self.radius * sn, c, 0.0, sn, s / segments, v))
        ring = segments + 1
        for s in range(segments):
            bottom0 = s
            bottom1 = s + 1
            top0 = s + ring
            top1 = s + 1 + ring
            indices.extend((bottom0, top0, bottom1))
            indices.extend((bottom1, top0, top1))

        # caps
        for y, ny in ((-half_height, -1.0), (half_height, 1.0)):
            center = len(rows)
            rows.append((0.0, y, 0.0, 0.0, ny, 0.0, 0.5, 0.5))
            first = len(rows)
            for s in range(segments):
                theta = s * 2 * math.pi / segments
                c = math.cos(theta)
                sn = math.sin(theta)
                rows.append((self.radius * c, y, self.radius * sn, 0.0, ny, 0.0, 0.5 + 0.5 * c, 0.5 + 0.5 * sn))
            for s in range(segments):
                i0 = first + s
                i1 = first + (s + 1) % segments
                if ny < 0:
                    indices.extend((i1, center, i0))
                else:
                    indices.extend((i0, center, i1))

        self._initialize(_pack_rows(rows), indices)
