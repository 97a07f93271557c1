"""
Batch sphere generation.

Every sphere is independent, so a batch is spread over worker processes.
Parameters are normalized in the calling process, which keeps the
current settings authoritative even when workers start fresh.
"""

from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Callable, Iterable, List, Mapping, Optional, Union

from shapegeo import log
from shapegeo.settings import current_settings
from .buffers import MeshBuffers, check_buffers, pack_indices
from .sphere import SphereParameters, sample_sphere_grid, triangulate_sphere_grid

SphereSpec = Union[SphereParameters, Mapping[str, float]]


def _normalize(item: SphereSpec) -> SphereParameters:
    if isinstance(item, SphereParameters):
        return SphereParameters.create(*item.as_tuple())
    return SphereParameters.create(**item)


def build_sphere_buffers(params: SphereParameters, epsilon: float) -> MeshBuffers:
    """Generate and validate buffers for already normalized parameters."""
    vertices, grid = sample_sphere_grid(params, epsilon)
    indices = pack_indices(triangulate_sphere_grid(grid, params), params.vertex_count)
    buffers = MeshBuffers(vertices, indices)
    check_buffers(buffers, params.vertex_count)
    return buffers


def generate_spheres(
    items: Iterable[SphereSpec],
    max_workers: Optional[int] = None,
    executor_factory: Callable[[Optional[int]], Executor] = ProcessPoolExecutor,
) -> List[MeshBuffers]:
    """
    Build buffers for each item, results in input order.

    Items are SphereParameters or keyword mappings accepted by
    SphereParameters.create. With max_workers=1 or a single item the
    work runs inline. Worker errors propagate to the caller.
    """
    params = [_normalize(item) for item in items]
    epsilon = current_settings().snap_epsilon

    if len(params) <= 1 or max_workers == 1:
        return [build_sphere_buffers(p, epsilon) for p in params]

    log.debug(f"[SphereBatch] generating {len(params)} spheres, max_workers={max_workers}")
    with executor_factory(max_workers) as executor:
        futures = [executor.submit(build_sphere_buffers, p, epsilon) for p in params]
        return [f.result() for f in futures]
