"""UV sphere, partial sphere and spherical patch tessellation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from shapegeo import log
from shapegeo.settings import current_settings
from .buffers import BufferSink
from .geometry import ShapeGeometry


def _is_falsy(value) -> bool:
    return not value or (isinstance(value, float) and math.isnan(value))


def _segments(value, minimum: int) -> int:
    if value is None or not math.isfinite(value):
        return minimum
    return max(minimum, math.floor(value))


@dataclass(frozen=True)
class SphereParameters:
    """
    Normalized sphere parameters.

    Alpha sweeps around the Y axis (longitude), theta sweeps from +Y
    towards -Y (latitude). Angles are in radians.
    """

    radius: float = 1.0
    horizontal_segments: int = 8
    vertical_segments: int = 6
    alpha_start: float = 0.0
    alpha_range: float = math.pi * 2
    theta_start: float = 0.0
    theta_range: float = math.pi
    theta_end: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "theta_end", self.theta_start + self.theta_range)

    @staticmethod
    def create(
        radius: Optional[float] = None,
        horizontal_segments: Optional[float] = None,
        vertical_segments: Optional[float] = None,
        alpha_start: Optional[float] = None,
        alpha_range: Optional[float] = None,
        theta_start: Optional[float] = None,
        theta_range: Optional[float] = None,
    ) -> "SphereParameters":
        """
        Build parameters from raw caller input. Never raises.

        Unsupplied values come from the current geometry settings.
        A falsy radius (0, NaN) becomes 1, segment counts are floored
        and clamped to at least 3 horizontal and 2 vertical.
        """
        defaults = current_settings().sphere

        if radius is None:
            radius = defaults.radius
        if horizontal_segments is None:
            horizontal_segments = defaults.horizontal_segments
        if vertical_segments is None:
            vertical_segments = defaults.vertical_segments

        params = SphereParameters(
            radius=1.0 if _is_falsy(radius) else radius,
            horizontal_segments=_segments(horizontal_segments, 3),
            vertical_segments=_segments(vertical_segments, 2),
            alpha_start=defaults.alpha_start if alpha_start is None else alpha_start,
            alpha_range=defaults.alpha_range if alpha_range is None else alpha_range,
            theta_start=defaults.theta_start if theta_start is None else theta_start,
            theta_range=defaults.theta_range if theta_range is None else theta_range,
        )

        if (params.radius != radius
                or params.horizontal_segments != horizontal_segments
                or params.vertical_segments != vertical_segments):
            log.debug(
                f"[SphereParameters] normalized radius={radius!r} -> {params.radius}, "
                f"segments=({horizontal_segments!r}, {vertical_segments!r}) -> "
                f"({params.horizontal_segments}, {params.vertical_segments})"
            )
        return params

    @property
    def vertex_count(self) -> int:
        return (self.vertical_segments + 1) * (self.horizontal_segments + 1)

    def as_tuple(self) -> Tuple:
        return (
            self.radius,
            self.horizontal_segments,
            self.vertical_segments,
            self.alpha_start,
            self.alpha_range,
            self.theta_start,
            self.theta_range,
        )


def _snap(value: float, epsilon: float) -> float:
    return 0.0 if abs(value) < epsilon else value


def sample_sphere_grid(params: SphereParameters, epsilon: float = 1e-6) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample the sphere on a (vertical+1) x (horizontal+1) grid.

    Returns the flat float32 attribute buffer, 8 scalars per row
    [px, py, pz, nx, ny, nz, u, v], and the grid of row indices.
    Seam and pole vertices are kept as separate rows.
    """
    rows = params.vertical_segments + 1
    cols = params.horizontal_segments + 1

    vertices = np.empty(rows * cols * 8, dtype=np.float32)
    grid = np.empty((rows, cols), dtype=np.int64)

    index = 0
    for iy in range(rows):
        v = iy / params.vertical_segments
        theta = params.theta_start + v * params.theta_range
        sin_theta = math.sin(theta)
        cos_theta = math.cos(theta)

        for ix in range(cols):
            u = ix / params.horizontal_segments
            alpha = params.alpha_start + u * params.alpha_range

            x = _snap(-params.radius * math.cos(alpha) * sin_theta, epsilon)
            y = _snap(params.radius * cos_theta, epsilon)
            z = _snap(params.radius * math.sin(alpha) * sin_theta, epsilon)

            offset = index * 8
            # position, normal, uv
            vertices[offset:offset + 8] = (x, y, z, x, y, z, u, 1.0 - v)

            grid[iy, ix] = index
            index += 1

    return vertices, grid


def triangulate_sphere_grid(grid: np.ndarray, params: SphereParameters) -> List[int]:
    """
    Two triangles per grid quad, (a, b, d) and (b, c, d).

    At a pole the whole ring collapses into one point, so the first band
    drops (a, b, d) when the sweep starts at theta = 0 and the last band
    drops (b, c, d) when it ends at theta = pi.
    """
    indices: List[int] = []
    vertical = params.vertical_segments

    for iy in range(vertical):
        for ix in range(params.horizontal_segments):
            a = int(grid[iy, ix + 1])
            b = int(grid[iy, ix])
            c = int(grid[iy + 1, ix])
            d = int(grid[iy + 1, ix + 1])

            if iy != 0 or params.theta_start > 0:
                indices.extend((a, b, d))
            if iy != vertical - 1 or params.theta_end < math.pi:
                indices.extend((b, c, d))

    return indices


class SphereGeometry(ShapeGeometry):
    """
    Sphere centered at the origin with Y as the pole axis.

    Partial spheres and patches are described by the alpha/theta sweeps.
    Normals are stored equal to positions.
    """

    name = "Sphere"

    def __init__(
        self,
        radius: Optional[float] = None,
        horizontal_segments: Optional[float] = None,
        vertical_segments: Optional[float] = None,
        alpha_start: Optional[float] = None,
        alpha_range: Optional[float] = None,
        theta_start: Optional[float] = None,
        theta_range: Optional[float] = None,
        sink: Optional[BufferSink] = None,
    ):
        super().__init__(sink)
        self._parameters = SphereParameters.create(
            radius=radius,
            horizontal_segments=horizontal_segments,
            vertical_segments=vertical_segments,
            alpha_start=alpha_start,
            alpha_range=alpha_range,
            theta_start=theta_start,
            theta_range=theta_range,
        )
        self.initialize()

    @staticmethod
    def from_parameters(params: SphereParameters, sink: Optional[BufferSink] = None) -> "SphereGeometry":
        return SphereGeometry(*params.as_tuple(), sink=sink)

    @property
    def sphere_parameters(self) -> SphereParameters:
        return self._parameters

    def parameters(self) -> Tuple:
        return self._parameters.as_tuple()

    def expected_vertex_count(self) -> int:
        return self._parameters.vertex_count

    def initialize(self):
        epsilon = current_settings().snap_epsilon
        vertices, grid = sample_sphere_grid(self._parameters, epsilon)
        indices = triangulate_sphere_grid(grid, self._parameters)
        self._initialize(vertices, indices)
