"""
Points and planes of complex projective space.

Point3D (x0, x1, x2, x3) has affine coordinates (x1, x2, x3) / x0.
Plane3D [u0, u1, u2, u3] is the set of points with u . x = 0; its normal
vector is (u1, u2, u3) and [1, 0, 0, 0] is the plane at infinity.

Joins and meets involving lines are delegated to Line3D, which stores both
the pointwise and the planewise Plücker coordinates.
"""

from __future__ import annotations
import math
from typing import Iterable, Optional, TYPE_CHECKING

import torch

from ..core.base import HVector
from ..core.precision import coerce_zero, format_vector, is_zero, to_complex_tensor
from ..core.types import CoordinatesLike, Scalar
from ..utils.random import RandomSource, pick_random_hvector, resolve_rng
from .affine import affine_string, canonical_direction, to_affine

if TYPE_CHECKING:
    from .complexes import Line3D
    from .plane import Point2D


class Point3D(HVector):
    """Point of projective space."""

    coordinate_count = 4

    @classmethod
    def from_affine(cls, x: Scalar, y: Scalar, z: Scalar, name: Optional[str] = None) -> Point3D:
        """Point with affine coordinates (x, y, z)."""
        return cls(1, x, y, z, name=name)

    @classmethod
    def from_point2d(cls, point: Point2D) -> Point3D:
        """Embed a planar point into the plane z = 0."""
        return cls(point[0], point[1], point[2], 0)

    def join(self, other, other2: Optional[Point3D] = None):
        """
        Join with a point, a line, or two points.

        Args:
            other: Point3D (gives a Line3D) or Line3D (gives a Plane3D)
            other2: Second point; with two points the result is their common
                    plane with this point

        Returns:
            The joined element, or None if it is not unique
        """
        from .complexes import Line3D

        if other2 is not None:
            line = Line3D.from_points(other, other2)
            if line is None:
                return None
            return line.join(self)
        if isinstance(other, Line3D):
            return other.join(self)
        if isinstance(other, Point3D):
            return Line3D.from_points(self, other)
        raise TypeError(f"Cannot join Point3D with {type(other).__name__}")

    def is_incident(self, other) -> bool:
        """Incidence with a Plane3D or a Line3D."""
        from .complexes import Line3D

        if isinstance(other, Plane3D):
            return self._incident(other)
        if isinstance(other, Line3D):
            return other.is_incident(self)
        raise TypeError(f"Expected Plane3D or Line3D, got {type(other).__name__}")

    def is_at_infinity(self) -> bool:
        return self.is_incident(Plane3D.INFINITY)

    def to_affine(self) -> Optional[torch.Tensor]:
        """Affine coordinates (x, y, z), or None at infinity."""
        return to_affine(self._vector)

    def as_direction(self) -> Optional[torch.Tensor]:
        """Normalized direction with canonical sign; None unless at infinity."""
        if not is_zero(self[0]):
            return None
        return canonical_direction(self._vector[1:])

    def distance_origin(self) -> float:
        affine = self.to_affine()
        if affine is None:
            return math.inf
        return torch.linalg.vector_norm(affine).item()

    def to_affine_string(self) -> str:
        if is_zero(self[0]):
            return format_vector(self.to_list()[1:]) + " (direction towards infinity)"
        return affine_string(self.to_affine())

    def get_plane(
        self,
        real: bool = True,
        exclude: Optional[Iterable[Plane3D]] = None,
        rng: RandomSource = None
    ) -> Plane3D:
        """Random plane through this point."""
        return Plane3D(self.get_random_incident(real, exclude, rng))

    def get_line(
        self,
        plane: Optional[Plane3D] = None,
        real: bool = True,
        rng: RandomSource = None
    ) -> Optional[Line3D]:
        """
        Random line through this point.

        Args:
            plane: If given, the line also lies in this plane
            real: Sample real coordinates
            rng: Random source

        Returns:
            The line, or None if the point is not on the given plane
        """
        from .complexes import Line3D

        rng = resolve_rng(rng)
        if plane is None:
            point = Point3D(pick_random_hvector(4, real, rng))
            while point == self:
                point = Point3D(pick_random_hvector(4, real, rng))
            return Line3D.from_points(self, point)

        if not self.is_incident(plane):
            return None
        point = plane.get_point(real, [self], rng)
        return Line3D.from_points(self, point)

    def carrier_line(self) -> Optional[Line3D]:
        """Real line through this imaginary point and its conjugate; None for real points."""
        from .complexes import Line3D

        if self.is_real():
            return None
        return Line3D.from_points(self, self.conjugate)


class Plane3D(HVector):
    """Plane of projective space."""

    coordinate_count = 4

    @classmethod
    def from_normal(cls, normal: CoordinatesLike, distance: Scalar = 0) -> Plane3D:
        """
        Plane with the given normal vector at the given distance from the origin.

        Args:
            normal: Normal vector (nx, ny, nz)
            distance: Signed distance along the normal
        """
        normal = to_complex_tensor(normal)
        norm = torch.linalg.vector_norm(normal).item()
        offset = torch.tensor([-complex(distance) * norm], dtype=normal.dtype)
        return cls(torch.cat([offset, normal]))

    @property
    def normal_vector(self) -> torch.Tensor:
        return self._vector[1:].clone()

    def distance(self) -> float:
        """Distance from the origin; infinite for the plane at infinity."""
        normal = self._vector[1:]
        if is_zero(normal):
            return math.inf
        norm = torch.linalg.vector_norm(normal).item()
        return abs(coerce_zero(self[0] / norm))

    def perpendicular_line(self, point: Point3D) -> Line3D:
        """
        Line through a point, perpendicular to this plane.

        Raises:
            ValueError: If the point lies on the plane or at infinity, or
                        this is the plane at infinity
        """
        if self.is_incident(point):
            raise ValueError("The point must not be incident with the plane")
        if self == Plane3D.INFINITY:
            raise ValueError("A line perpendicular to the plane at infinity is not defined")
        affine = point.to_affine()
        if affine is None:
            raise ValueError("The point must not be at infinity")
        other = Point3D(torch.cat([torch.ones(1, dtype=affine.dtype), affine + self.normal_vector]))
        return point.join(other)

    def meet(self, other, other2: Optional[Plane3D] = None):
        """
        Meet with a plane, a line, or two planes.

        Args:
            other: Plane3D (gives a Line3D) or Line3D (gives a Point3D)
            other2: Second plane; with two planes the result is the common
                    point of all three

        Returns:
            The intersection, or None if it is not unique
        """
        from .complexes import Line3D

        if other2 is not None:
            line = Line3D.from_planes(other, other2)
            if line is None:
                return None
            return line.meet(self)
        if isinstance(other, Line3D):
            return other.meet(self)
        if isinstance(other, Plane3D):
            return Line3D.from_planes(self, other)
        raise TypeError(f"Cannot meet Plane3D with {type(other).__name__}")

    def is_incident(self, other) -> bool:
        """Incidence with a Point3D or a Line3D."""
        from .complexes import Line3D

        if isinstance(other, Point3D):
            return self._incident(other)
        if isinstance(other, Line3D):
            return other.is_incident(self)
        raise TypeError(f"Expected Point3D or Line3D, got {type(other).__name__}")

    def get_point(
        self,
        real: bool = True,
        exclude: Optional[Iterable[Point3D]] = None,
        rng: RandomSource = None
    ) -> Point3D:
        """Random point on this plane."""
        return Point3D(self.get_random_incident(real, exclude, rng))

    def get_line(
        self,
        point: Optional[Point3D] = None,
        real: bool = True,
        rng: RandomSource = None
    ) -> Optional[Line3D]:
        """
        Random line in this plane.

        Args:
            point: If given, the line also passes through this point
            real: Sample real coordinates
            rng: Random source

        Returns:
            The line, or None if the given point is not on this plane
        """
        from .complexes import Line3D

        rng = resolve_rng(rng)
        if point is None:
            plane = Plane3D(pick_random_hvector(4, real, rng))
            while plane == self:
                plane = Plane3D(pick_random_hvector(4, real, rng))
            return Line3D.from_planes(self, plane)

        if not self.is_incident(point):
            return None
        plane = point.get_plane(real, [self], rng)
        return Line3D.from_planes(self, plane)

    def carrier_line(self) -> Optional[Line3D]:
        """Real line shared by this imaginary plane and its conjugate; None for real planes."""
        from .complexes import Line3D

        if self.is_real():
            return None
        return Line3D.from_planes(self, self.conjugate)


Point3D.ORIGIN = Point3D(1, 0, 0, 0)
Point3D.INFINITY_X = Point3D(0, 1, 0, 0)
Point3D.INFINITY_Y = Point3D(0, 0, 1, 0)
Point3D.INFINITY_Z = Point3D(0, 0, 0, 1)
Point3D.UNITY_X = Point3D(1, 1, 0, 0)
Point3D.UNITY_Y = Point3D(1, 0, 1, 0)
Point3D.UNITY_Z = Point3D(1, 0, 0, 1)
Point3D.UNITY = Point3D(1, 1, 1, 1)

Plane3D.YZ = Plane3D(0, 1, 0, 0)
Plane3D.XZ = Plane3D(0, 0, 1, 0)
Plane3D.XY = Plane3D(0, 0, 0, 1)
Plane3D.INFINITY = Plane3D(1, 0, 0, 0)
Plane3D.UNITY = Plane3D(1, 1, 1, 1)
