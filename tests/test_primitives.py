"""
Tests for PGA geometric primitives.
"""

import math

import numpy as np
import pytest
import torch

from sparse_pga.pga.algebra import Line, Plane, Point, Zero, allclose
from sparse_pga.pga.primitives import (
    distance_point_plane,
    distance_point_point,
    ideal_point,
    join,
    line_from_plucker,
    line_from_point_direction,
    line_from_points,
    line_to_plucker,
    meet,
    origin,
    plane,
    plane_from_normal_point,
    plane_to_normal_distance,
    point,
    point_from_coords,
    point_to_cartesian,
    point_to_coords,
    project_point_plane,
    reflect_point_plane,
    x_axis,
    xy_plane,
    xz_plane,
    yz_plane,
    z_axis,
)


class TestPoints:
    """Tests for point creation and extraction."""

    def test_point_components(self):
        p = point(1.0, 2.0, 3.0)
        assert type(p) is Point
        assert (p.e032, p.e013, p.e021, p.e123) == (1.0, 2.0, 3.0, 1.0)

    def test_point_to_cartesian(self):
        assert point_to_cartesian(point(1.0, -2.0, 3.5)) == (1.0, -2.0, 3.5)

    def test_weighted_point(self):
        p = point(1.0, 2.0, 3.0, w=2.0)
        assert p.e123 == 2.0
        assert point_to_cartesian(p) == (1.0, 2.0, 3.0)

    def test_ideal_point(self):
        p = ideal_point(1.0, 0.0, 0.0)
        assert p.e123 == 0.0
        assert p.e032 == 1.0

    def test_ideal_point_cartesian_is_inf(self):
        x, y, z = point_to_cartesian(ideal_point(1.0, 0.0, 0.0))
        assert x == math.inf
        assert math.isnan(y)
        assert math.isnan(z)

    def test_ideal_point_cartesian_numpy(self):
        coords = point_to_coords(ideal_point(np.array([1.0, -1.0]), np.zeros(2), np.zeros(2)))
        assert np.isposinf(coords[0, 0])
        assert np.isneginf(coords[1, 0])

    def test_origin(self):
        assert point_to_cartesian(origin()) == (0.0, 0.0, 0.0)

    def test_coords_numpy(self):
        coords = np.array([[1.0, 2.0, 3.0], [-1.0, 0.5, 0.0]])
        np.testing.assert_allclose(point_to_coords(point_from_coords(coords)), coords)

    def test_coords_torch(self):
        coords = torch.tensor([[1.0, 2.0, 3.0], [-1.0, 0.5, 0.0]])
        result = point_to_coords(point_from_coords(coords))
        assert torch.allclose(result, coords)


class TestPlanes:
    """Tests for plane creation."""

    def test_plane_components(self):
        p = plane(1.0, 2.0, 3.0, 4.0)
        assert type(p) is Plane
        assert plane_to_normal_distance(p) == ((1.0, 2.0, 3.0), 4.0)

    def test_plane_from_normal_point(self):
        p = plane_from_normal_point((0.0, 0.0, 1.0), (5.0, 5.0, 2.0))
        assert plane_to_normal_distance(p) == ((0.0, 0.0, 1.0), -2.0)

    def test_coordinate_planes(self):
        assert xy_plane().e3 == 1.0
        assert xz_plane().e2 == 1.0
        assert yz_plane().e1 == 1.0


class TestLines:
    """Tests for lines, join and meet."""

    def test_plucker_round_trip(self):
        line = line_from_plucker((1.0, 2.0, 3.0), (-3.0, 0.0, 1.0))
        assert type(line) is Line
        assert line_to_plucker(line) == ((1.0, 2.0, 3.0), (-3.0, 0.0, 1.0))

    def test_axes(self):
        assert x_axis().e23 == 1.0
        assert z_axis().e12 == 1.0

    def test_meet_of_planes(self):
        """x = 0 and y = 0 meet in the z axis."""
        assert allclose(meet(yz_plane(), xz_plane()), z_axis())

    def test_line_from_points_is_incident(self):
        p1 = point(0.0, 0.0, 0.0)
        p2 = point(0.0, 0.0, 1.0)
        line = line_from_points(p1, p2)
        assert allclose(join(line, point(0.0, 0.0, 2.0)), Zero())
        assert not allclose(join(line, point(1.0, 0.0, 2.0)), Zero())

    def test_line_through_points_matches_plucker(self):
        """The join of two points is proportional to the Plücker line through them."""
        line = line_from_points(point(0.0, 1.0, 0.0), point(1.0, 1.0, 0.0))
        expected = line_from_point_direction((0.0, 1.0, 0.0), (1.0, 0.0, 0.0))
        ratio = line.e23 / expected.e23
        assert allclose(line, ratio * expected)

    def test_line_from_point_direction_contains_point(self):
        line = line_from_point_direction((0.0, 1.0, 0.0), (1.0, 0.0, 0.0))
        assert line.e03 == -1.0
        assert allclose(join(line, point(0.0, 1.0, 0.0)), Zero())
        assert allclose(join(line, point(5.0, 1.0, 0.0)), Zero())

    def test_join_line_and_point_is_plane(self):
        """The x axis joined with (0, 1, 0) spans the plane z = 0."""
        result = join(x_axis(), point(0.0, 1.0, 0.0))
        assert type(result) is Plane
        assert result.e3 != 0.0
        assert allclose(result, result.e3 * xy_plane())


class TestMetric:
    """Tests for distances, projection and reflection."""

    def test_distance_point_plane(self):
        assert distance_point_plane(point(2.0, 0.0, 0.0), plane(1.0, 0.0, 0.0, -1.0)) == pytest.approx(1.0)
        assert distance_point_plane(origin(), plane(1.0, 0.0, 0.0, -1.0)) == pytest.approx(-1.0)

    def test_distance_is_scale_invariant(self):
        d = distance_point_plane(point(2.0, 0.0, 0.0, w=3.0), plane(2.0, 0.0, 0.0, -2.0))
        assert d == pytest.approx(1.0)

    def test_distance_point_point(self):
        assert distance_point_point(origin(), point(3.0, 4.0, 0.0)) == pytest.approx(5.0)

    def test_project_onto_xy_plane(self):
        result = project_point_plane(point(1.0, 2.0, 3.0), xy_plane())
        assert point_to_cartesian(result) == pytest.approx((1.0, 2.0, 0.0))
        assert result.e123 == 1.0

    def test_project_onto_offset_plane(self):
        result = project_point_plane(point(1.0, 2.0, 3.0), plane(0.0, 0.0, 1.0, -1.0))
        assert point_to_cartesian(result) == pytest.approx((1.0, 2.0, 1.0))

    def test_reflect_in_xy_plane(self):
        result = reflect_point_plane(point(1.0, 2.0, 3.0), xy_plane())
        assert point_to_cartesian(result) == pytest.approx((1.0, 2.0, -3.0))

    def test_distance_after_projection(self):
        p = point(0.5, -1.0, 4.0)
        pi = plane(1.0, 2.0, 2.0, -3.0)
        projected = project_point_plane(p, pi)
        assert distance_point_plane(projected, pi) == pytest.approx(0.0, abs=1e-12)
        assert distance_point_point(p, projected) == pytest.approx(abs(distance_point_plane(p, pi)))
