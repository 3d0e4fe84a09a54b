"""
Tests for the entities of the projective line, plane and space:
Element1D, Point2D, Line2D, Point3D and Plane3D.

These tests pin down the coordinate conventions:

1. Affine coordinates are x[1:] / x[0]; x[0] = 0 is at infinity
2. A hyperplane u contains a point x iff u . x = 0
3. 2D join and meet are cross products
4. 3D joins and meets of points and planes go through Line3D
"""

import math

import pytest
import torch

from projective_geometry import (
    Element1D,
    Line2D,
    Line3D,
    Plane3D,
    Point2D,
    Point3D,
)


# =============================================================================
# Projective Line
# =============================================================================

class TestElement1D:
    """Tests for elements of the projective line."""

    def test_constants(self):
        assert Element1D.ORIGIN == Element1D(1, 0)
        assert Element1D.INFINITY == Element1D(0, 1)
        assert Element1D.UNITY == Element1D(1, 1)

    def test_from_affine(self):
        assert Element1D.from_affine(3) == Element1D(2, 6)
        assert Element1D.from_affine(3).to_affine() == 3

    def test_infinity(self):
        assert Element1D.INFINITY.is_at_infinity()
        assert Element1D.INFINITY.to_affine() is None
        assert Element1D.INFINITY.distance_origin() == math.inf
        assert Element1D.INFINITY.to_affine_string() == "infinity"

    def test_distance_origin(self):
        assert Element1D(2, -6).distance_origin() == pytest.approx(3)

    def test_affine_string(self):
        assert Element1D(2, 1).to_affine_string() == "(0.5)"

    def test_requires_two_coordinates(self):
        with pytest.raises(ValueError):
            Element1D(1, 2, 3)


# =============================================================================
# Projective Plane: Points
# =============================================================================

class TestPoint2D:
    """Tests for points of the projective plane."""

    def test_constants(self):
        assert Point2D.ORIGIN == Point2D(1, 0, 0)
        assert Point2D.INFINITY_X == Point2D(0, 1, 0)
        assert Point2D.INFINITY_Y == Point2D(0, 0, 1)
        assert Point2D.UNITY == Point2D(1, 1, 1)

    def test_from_affine(self):
        p = Point2D.from_affine(2, 3)
        assert p == Point2D(2, 4, 6)
        assert torch.allclose(p.to_affine(), torch.tensor([2, 3], dtype=torch.complex128))

    def test_join(self):
        line = Point2D(1, 0, 0).join(Point2D(1, 3, 2.5))
        assert line == Line2D(0, -2.5, 3)
        assert Point2D.ORIGIN.is_incident(line)
        assert Point2D(1, 3, 2.5).is_incident(line)

    def test_join_equal_points(self):
        assert Point2D(1, 2, 3).join(Point2D(2, 4, 6)) is None

    def test_join_wrong_type(self):
        with pytest.raises(TypeError):
            Point2D.ORIGIN.join(Line2D.INFINITY)
        with pytest.raises(TypeError):
            Point2D.ORIGIN.is_incident(Point2D.UNITY)

    def test_at_infinity(self):
        assert Point2D(0, 3, 4).is_at_infinity()
        assert Point2D(0, 3, 4).to_affine() is None
        assert Point2D(0, 3, 4).distance_origin() == math.inf
        assert not Point2D.ORIGIN.is_at_infinity()

    def test_as_direction(self):
        direction = Point2D(0, -3, -4).as_direction()
        assert torch.allclose(direction, torch.tensor([0.6, 0.8], dtype=torch.complex128))
        assert Point2D.ORIGIN.as_direction() is None

    def test_distance_origin(self):
        assert Point2D.from_affine(3, 4).distance_origin() == pytest.approx(5)

    def test_affine_string(self):
        assert Point2D(2, 1, 4).to_affine_string() == "(0.5, 2)"
        assert Point2D(0, 1, 2).to_affine_string() == "(1, 2) (direction towards infinity)"

    def test_get_line(self, rng):
        point = Point2D(1, 2, 3)
        for _ in range(10):
            line = point.get_line(rng=rng)
            assert isinstance(line, Line2D)
            assert point.is_incident(line)


# =============================================================================
# Projective Plane: Lines
# =============================================================================

class TestLine2D:
    """Tests for lines of the projective plane."""

    def test_constants(self):
        assert Line2D.INFINITY == Line2D(1, 0, 0)
        assert Line2D.X_AXIS.is_incident(Point2D.ORIGIN)
        assert Line2D.X_AXIS.is_incident(Point2D.INFINITY_X)
        assert Line2D.Y_AXIS.is_incident(Point2D.INFINITY_Y)

    def test_meet(self):
        line = Line2D(0, -2.5, 3)
        point = line.meet(Line2D.INFINITY)
        assert point == Point2D(0, 3, 2.5)
        assert repr(point) == "Point2D(0, 3, 2.5)"

    def test_meet_equal_lines(self):
        assert Line2D(1, 2, 3).meet(Line2D(-1, -2, -3)) is None

    def test_meet_wrong_type(self):
        with pytest.raises(TypeError):
            Line2D.INFINITY.meet(Point2D.ORIGIN)

    def test_from_slope_intercept(self):
        line = Line2D.from_slope_intercept(2, 1)
        assert line == Line2D(1, 2, -1)
        assert line.is_incident(Point2D.from_affine(0, 1))
        assert line.is_incident(Point2D.from_affine(1, 3))

    def test_vertical(self):
        line = Line2D.vertical(2)
        assert line.is_incident(Point2D.from_affine(2, -7))
        assert line.to_affine_string() == "x = 2"

    def test_offsets(self):
        line = Line2D.from_slope_intercept(2, 1)
        assert line.offset_y() == pytest.approx(1)
        assert line.offset_x() == pytest.approx(-0.5)

    def test_offset_parallel_and_axis(self):
        horizontal = Line2D.from_slope_intercept(0, 4)
        assert horizontal.offset_x() == complex(math.inf)
        assert Line2D.X_AXIS.offset_x() is None

    def test_direction(self):
        direction = Line2D.from_slope_intercept(2, 1).direction()
        assert direction.tolist() == [-1, -2]

    def test_distance_origin(self):
        assert Line2D(-5, 0, 1).distance_origin() == pytest.approx(5)
        assert Line2D.INFINITY.distance_origin() == math.inf
        assert Line2D.X_AXIS.distance_origin() == pytest.approx(0)

    def test_affine_string(self):
        assert Line2D.INFINITY.to_affine_string() == "line at infinity"
        assert Line2D.from_slope_intercept(2, 1).to_affine_string() == "y = (2) x + (1)"

    def test_get_point(self, rng):
        line = Line2D(1, 2, 3)
        for _ in range(10):
            point = line.get_point(rng=rng)
            assert isinstance(point, Point2D)
            assert line.is_incident(point)


# =============================================================================
# Projective Space: Points
# =============================================================================

class TestPoint3D:
    """Tests for points of projective space."""

    def test_constants(self):
        assert Point3D.ORIGIN == Point3D(1, 0, 0, 0)
        assert Point3D.INFINITY_Z == Point3D(0, 0, 0, 1)
        assert Point3D.UNITY == Point3D(1, 1, 1, 1)

    def test_from_point2d(self):
        assert Point3D.from_point2d(Point2D(1, 2, 3)) == Point3D(1, 2, 3, 0)

    def test_affine(self):
        p = Point3D.from_affine(1, 2, 2)
        assert p.distance_origin() == pytest.approx(3)
        assert p.to_affine_string() == "(1, 2, 2)"
        assert Point3D.INFINITY_X.to_affine() is None

    def test_as_direction(self):
        direction = Point3D(0, 0, -2, 0).as_direction()
        assert direction.tolist() == [0, 1, 0]

    def test_join_two_points(self):
        line = Point3D.ORIGIN.join(Point3D.INFINITY_X)
        assert isinstance(line, Line3D)
        assert line == Line3D.X_AXIS

    def test_join_three_points(self):
        plane = Point3D.ORIGIN.join(Point3D.INFINITY_X, Point3D.INFINITY_Y)
        assert plane == Plane3D.XY

    def test_join_collinear_points(self):
        assert Point3D.ORIGIN.join(Point3D.INFINITY_X, Point3D.from_affine(5, 0, 0)) is None

    def test_join_line(self):
        plane = Point3D.from_affine(0, 1, 0).join(Line3D.X_AXIS)
        assert plane == Plane3D.XY

    def test_join_wrong_type(self):
        with pytest.raises(TypeError):
            Point3D.ORIGIN.join(Plane3D.XY)

    def test_incidence(self):
        assert Point3D.ORIGIN.is_incident(Plane3D.XY)
        assert Point3D.ORIGIN.is_incident(Line3D.Z_AXIS)
        assert not Point3D.UNITY.is_incident(Plane3D.XY)
        assert Point3D.INFINITY_Z.is_at_infinity()

    def test_get_plane(self, rng):
        point = Point3D(1, 2, -1, 3)
        for _ in range(10):
            assert point.is_incident(point.get_plane(rng=rng))

    def test_get_line(self, rng):
        point = Point3D(1, 2, -1, 3)
        for _ in range(5):
            line = point.get_line(rng=rng)
            assert line.is_incident(point)

    def test_get_line_in_plane(self, rng):
        plane = Plane3D(1, 1, 1, -3)
        point = Point3D.UNITY
        for _ in range(5):
            line = point.get_line(plane, rng=rng)
            assert line.is_incident(point)
            assert line.is_incident(plane)
        assert Point3D.ORIGIN.get_line(plane, rng=rng) is None

    def test_carrier_line(self):
        point = Point3D(1, 1j, 0, 0)
        line = point.carrier_line()
        assert line.is_real()
        assert line.is_incident(point)
        assert line.is_incident(point.conjugate)
        assert Point3D.ORIGIN.carrier_line() is None


# =============================================================================
# Projective Space: Planes
# =============================================================================

class TestPlane3D:
    """Tests for planes of projective space."""

    def test_constants(self):
        assert Plane3D.INFINITY == Plane3D(1, 0, 0, 0)
        assert Plane3D.XY.is_incident(Point3D.INFINITY_X)
        assert Plane3D.YZ.is_incident(Point3D.INFINITY_Z)

    def test_from_normal(self):
        plane = Plane3D.from_normal([0, 0, 2], 3)
        assert plane.is_incident(Point3D.from_affine(5, -1, 3))
        assert plane.distance() == pytest.approx(3)
        assert plane.normal_vector.tolist() == [0, 0, 2]

    def test_distance_of_infinity(self):
        assert Plane3D.INFINITY.distance() == math.inf

    def test_meet_two_planes(self):
        assert Plane3D.XY.meet(Plane3D.XZ) == Line3D.X_AXIS

    def test_meet_three_planes(self):
        assert Plane3D.XY.meet(Plane3D.XZ, Plane3D.YZ) == Point3D.ORIGIN
        assert Plane3D.XY.meet(Plane3D.XZ, Plane3D(0, 0, 1, 1)) is None

    def test_meet_line(self):
        assert Plane3D.YZ.meet(Line3D.X_AXIS) == Point3D.ORIGIN
        assert Plane3D.XY.meet(Line3D.X_AXIS) is None

    def test_perpendicular_line(self):
        point = Point3D.from_affine(1, 2, 3)
        line = Plane3D.XY.perpendicular_line(point)
        assert line == Line3D.from_points(point, Point3D.INFINITY_Z)

    def test_perpendicular_line_errors(self):
        with pytest.raises(ValueError):
            Plane3D.XY.perpendicular_line(Point3D.ORIGIN)
        with pytest.raises(ValueError):
            Plane3D.INFINITY.perpendicular_line(Point3D.ORIGIN)

    def test_get_point(self, rng):
        plane = Plane3D(2, -1, 0, 3)
        for _ in range(10):
            assert plane.is_incident(plane.get_point(rng=rng))

    def test_get_line(self, rng):
        plane = Plane3D(2, -1, 0, 3)
        for _ in range(5):
            assert plane.get_line(rng=rng).is_incident(plane)
        point = plane.get_point(rng=rng)
        line = plane.get_line(point, rng=rng)
        assert line.is_incident(point)
        assert line.is_incident(plane)

    def test_carrier_line(self):
        plane = Plane3D(0, 1, 1j, 0)
        line = plane.carrier_line()
        assert line.is_real()
        assert line == Line3D.Z_AXIS
        assert Plane3D.XY.carrier_line() is None
