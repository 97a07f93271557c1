"""Tests for Box, Plane and Cylinder geometries."""

import numpy as np
import pytest

from shapegeo.mesh import BoxGeometry, PlaneGeometry, CylinderGeometry


def face_normals(buffers):
    p = buffers.positions.astype(np.float64)
    tri = buffers.triangles.astype(np.int64)
    return np.cross(p[tri[:, 1]] - p[tri[:, 0]], p[tri[:, 2]] - p[tri[:, 0]])


def assert_winding_matches_normals(buffers):
    """Every triangle faces the same way as the normals of its vertices."""
    fn = face_normals(buffers)
    vn = buffers.normals.astype(np.float64)[buffers.triangles.astype(np.int64)].sum(axis=1)
    assert np.all(np.einsum("ij,ij->i", fn, vn) > 0)


class TestBox:
    def test_counts(self):
        box = BoxGeometry()
        assert box.buffers.vertex_count == 24
        assert box.buffers.triangle_count == 12
        assert box.buffers.indices.dtype == np.uint16

    def test_extent(self):
        box = BoxGeometry(2.0, 4.0, 6.0)
        p = box.buffers.positions
        np.testing.assert_allclose(p.min(axis=0), [-1.0, -2.0, -3.0])
        np.testing.assert_allclose(p.max(axis=0), [1.0, 2.0, 3.0])

    def test_cube_by_default(self):
        box = BoxGeometry(3.0)
        assert box.parameters() == (3.0, 3.0, 3.0)

    def test_winding(self):
        assert_winding_matches_normals(BoxGeometry(1.0, 2.0, 3.0).buffers)

    def test_normals_are_unit_and_outward(self):
        box = BoxGeometry()
        n = box.buffers.normals
        np.testing.assert_allclose(np.linalg.norm(n, axis=1), 1.0)
        assert np.all(np.einsum("ij,ij->i", n, box.buffers.positions) > 0)

    def test_uv_range(self):
        uv = BoxGeometry().buffers.uvs
        assert uv.min() == 0.0
        assert uv.max() == 1.0


class TestPlane:
    def test_counts(self):
        plane = PlaneGeometry(segments_w=4, segments_d=3)
        assert plane.buffers.vertex_count == 20
        assert plane.buffers.triangle_count == 24

    def test_faces_up(self):
        plane = PlaneGeometry(2.0, 1.0, 3, 2)
        assert np.all(face_normals(plane.buffers)[:, 1] > 0)
        assert np.all(plane.buffers.normals == [0.0, 1.0, 0.0])
        assert np.all(plane.buffers.positions[:, 1] == 0.0)

    def test_segments_clamped(self):
        plane = PlaneGeometry(segments_w=0, segments_d=-5)
        assert plane.parameters()[2:] == (1, 1)
        assert plane.buffers.vertex_count == 4

    def test_extent(self):
        p = PlaneGeometry(4.0, 2.0).buffers.positions
        np.testing.assert_allclose(p[:, 0].min(), -2.0)
        np.testing.assert_allclose(p[:, 2].max(), 1.0)


class TestCylinder:
    @pytest.mark.parametrize("segments", [3, 8, 16])
    def test_counts(self, segments):
        cyl = CylinderGeometry(segments=segments)
        assert cyl.buffers.vertex_count == 4 * (segments + 1)
        assert cyl.buffers.triangle_count == 4 * segments

    def test_segments_clamped(self):
        assert CylinderGeometry(segments=1).segments == 3

    def test_winding(self):
        assert_winding_matches_normals(CylinderGeometry(radius=0.5, height=2.0, segments=12).buffers)

    def test_side_on_radius(self):
        cyl = CylinderGeometry(radius=2.0, height=1.0, segments=8)
        side = cyl.buffers.positions[: 2 * 9]
        np.testing.assert_allclose(np.hypot(side[:, 0], side[:, 2]), 2.0, rtol=1e-6)
        np.testing.assert_allclose(np.abs(side[:, 1]), 0.5)

    def test_sink(self):
        calls = []
        CylinderGeometry(sink=lambda v, i: calls.append(i.size))
        assert calls == [3 * 4 * 16]

    def test_key_differs_between_shapes(self):
        assert BoxGeometry().key != PlaneGeometry().key
        assert CylinderGeometry().key == CylinderGeometry().key
