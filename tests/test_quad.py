"""Tests for quad.py: corner payloads and counter-clockwise ordering."""
from collections import namedtuple

import numpy as np
import pytest

from plate_geometry.quad import Quad3D, position_of


class _WithPositionMethod:
    def __init__(self, pos):
        self._pos = pos

    def position(self):
        return self._pos


_WithPos = namedtuple("_WithPos", ["pos", "color"])


def _ring_normal(pts):
    a, b, c = (np.asarray(p, dtype=float) for p in pts)
    return np.cross(b - a, c - a)


class TestPositionOf:
    def test_ndarray_passthrough(self):
        v = np.array([1.0, 2.0, 3.0])
        assert position_of(v) is v

    def test_tuple(self):
        np.testing.assert_array_equal(position_of((1, 2, 3)), [1.0, 2.0, 3.0])

    def test_position_method(self):
        payload = _WithPositionMethod(np.array([4.0, 5.0, 6.0]))
        np.testing.assert_array_equal(position_of(payload), [4, 5, 6])

    def test_pos_attribute(self):
        payload = _WithPos(pos=(7.0, 8.0, 9.0), color="red")
        np.testing.assert_array_equal(position_of(payload), [7, 8, 9])

    def test_unresolvable(self):
        with pytest.raises(TypeError):
            position_of((1.0, 2.0))


class TestQuad3D:
    def test_ccw_order_kept_when_matching_normal(self, straight_plate):
        quad = straight_plate.front_face()[0]
        ring = quad.to_ccw_verts()
        assert ring[0] is quad.top_left
        assert ring[1] is quad.bottom_left
        normal = _ring_normal(ring[:3])
        assert float(normal @ quad.normal) > 0

    def test_ccw_order_flipped_against_normal(self, straight_plate):
        quad = straight_plate.left_face()[0]
        ring = quad.to_ccw_verts()
        assert ring[0] is quad.top_left
        assert ring[1] is quad.top_right
        normal = _ring_normal(ring[:3])
        assert float(normal @ quad.normal) > 0

    def test_triangles_share_first_corner(self, curved_plate):
        for quad in curved_plate.right_face():
            tri_a, tri_b = quad.triangles()
            assert tri_a[0] is tri_b[0]
            assert tri_a[2] is tri_b[1]
            for tri in (tri_a, tri_b):
                assert float(_ring_normal(tri) @ quad.normal) > 0

    def test_positions_from_payloads(self):
        corners = [_WithPos(pos=(x, 0.0, z), color=None)
                   for x, z in [(0, 1), (1, 1), (0, 0), (1, 0)]]
        quad = Quad3D(*corners, normal=np.array([0.0, -1.0, 0.0]))
        np.testing.assert_array_equal(
            quad.positions(), [[0, 0, 1], [1, 0, 1], [0, 0, 0], [1, 0, 0]],
        )

    def test_zero_normal_keeps_default_ring(self):
        quad = Quad3D(
            top_left=np.zeros(3), top_right=np.array([1.0, 0, 0]),
            bottom_left=np.array([0, 1.0, 0]), bottom_right=np.array([1.0, 1, 0]),
            normal=np.zeros(3),
        )
        ring = quad.to_ccw_verts()
        assert ring[1] is quad.bottom_left
