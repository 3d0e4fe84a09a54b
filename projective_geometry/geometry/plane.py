"""
Points and lines of the complex projective plane.

Point2D (x0, x1, x2) has affine coordinates (x1 / x0, x2 / x0).
Line2D [u0, u1, u2] is the set of points with u0 x0 + u1 x1 + u2 x2 = 0.

Both joins and meets are cross products:
    P.join(Q) = P x Q        (line through two points)
    l.meet(m) = l x m        (common point of two lines)

Example:
    >>> origin = Point2D.ORIGIN
    >>> line = origin.join(Point2D(1, 3, 2.5))
    >>> line.meet(Line2D.INFINITY)
    Point2D(0, 3, 2.5)
"""

from __future__ import annotations
import math
from typing import Iterable, Optional

import torch

from ..core.base import HVector
from ..core.precision import format_complex, format_vector, is_zero
from ..core.types import Scalar
from ..utils.random import RandomSource
from .affine import affine_string, canonical_direction, to_affine
from .algebra import cross_product


class Point2D(HVector):
    """Point of the projective plane."""

    coordinate_count = 3

    @classmethod
    def from_affine(cls, x: Scalar, y: Scalar, name: Optional[str] = None) -> Point2D:
        """Point with affine coordinates (x, y)."""
        return cls(1, x, y, name=name)

    def join(self, point: Point2D) -> Optional[Line2D]:
        """
        Line through this point and another.

        Returns:
            The connecting line, or None if the points are equal
        """
        if not isinstance(point, Point2D):
            raise TypeError(f"Expected Point2D, got {type(point).__name__}")
        if self == point:
            return None
        return Line2D(cross_product(self._vector, point._vector))

    def is_incident(self, line: Line2D) -> bool:
        if not isinstance(line, Line2D):
            raise TypeError(f"Expected Line2D, got {type(line).__name__}")
        return self._incident(line)

    def is_at_infinity(self) -> bool:
        return self.is_incident(Line2D.INFINITY)

    def to_affine(self) -> Optional[torch.Tensor]:
        """Affine coordinates (x, y), or None at infinity."""
        return to_affine(self._vector)

    def as_direction(self) -> Optional[torch.Tensor]:
        """
        Normalized direction of a point at infinity.

        Returns:
            Unit vector (dx, dy) with canonical sign, or None if the point
            is not at infinity
        """
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

    def get_line(
        self,
        real: bool = True,
        exclude: Optional[Iterable[Line2D]] = None,
        rng: RandomSource = None
    ) -> Line2D:
        """Random line through this point."""
        return Line2D(self.get_random_incident(real, exclude, rng))


class Line2D(HVector):
    """Line of the projective plane."""

    coordinate_count = 3

    @classmethod
    def from_slope_intercept(cls, slope: Scalar, intercept: Scalar) -> Line2D:
        """Line y = slope * x + intercept."""
        return cls(intercept, slope, -1)

    @classmethod
    def vertical(cls, offset_x: Scalar) -> Line2D:
        """Line x = offset_x."""
        return cls(-complex(offset_x), 1, 0)

    def meet(self, line: Line2D) -> Optional[Point2D]:
        """
        Common point of this line and another.

        Returns:
            The intersection, or None if the lines are equal
        """
        if not isinstance(line, Line2D):
            raise TypeError(f"Expected Line2D, got {type(line).__name__}")
        if self == line:
            return None
        return Point2D(cross_product(self._vector, line._vector))

    def is_incident(self, point: Point2D) -> bool:
        if not isinstance(point, Point2D):
            raise TypeError(f"Expected Point2D, got {type(point).__name__}")
        return self._incident(point)

    def direction(self) -> torch.Tensor:
        """Direction vector (u2, -u1) of the line."""
        return torch.stack([self._vector[2], -self._vector[1]])

    def _axis_offset(self, axis: Line2D, index: int) -> Optional[complex]:
        meet = self.meet(axis)
        if meet is None:
            return None
        if is_zero(meet[0]):
            return complex(math.inf)
        return meet[index] / meet[0]

    def offset_x(self) -> Optional[complex]:
        """
        Intersection with the x-axis.

        Returns:
            x coordinate of the intersection, complex(inf) for a line parallel
            to the x-axis, or None if the line is the x-axis
        """
        return self._axis_offset(Line2D.X_AXIS, 1)

    def offset_y(self) -> Optional[complex]:
        """Intersection with the y-axis, analogous to offset_x."""
        return self._axis_offset(Line2D.Y_AXIS, 2)

    def distance_origin(self) -> float:
        """Euclidean distance from the origin; infinite for the line at infinity."""
        foot_direction = Point2D(1, self[1], self[2])
        perpendicular = foot_direction.join(Point2D.ORIGIN)
        if perpendicular is None:
            return math.inf
        foot = perpendicular.meet(self)
        if foot is None:
            return math.inf
        return foot.distance_origin()

    def to_affine_string(self) -> str:
        if self == Line2D.INFINITY:
            return "line at infinity"
        if is_zero(self[2]):
            return f"x = {format_complex(-self[0] / self[1])}"
        slope = -self[1] / self[2]
        intercept = -self[0] / self[2]
        return f"y = ({format_complex(slope)}) x + ({format_complex(intercept)})"

    def get_point(
        self,
        real: bool = True,
        exclude: Optional[Iterable[Point2D]] = None,
        rng: RandomSource = None
    ) -> Point2D:
        """Random point on this line."""
        return Point2D(self.get_random_incident(real, exclude, rng))


Point2D.ORIGIN = Point2D(1, 0, 0)
Point2D.INFINITY_X = Point2D(0, 1, 0)
Point2D.INFINITY_Y = Point2D(0, 0, 1)
Point2D.UNITY = Point2D(1, 1, 1)

Line2D.INFINITY = Line2D(1, 0, 0)
Line2D.X_AXIS = Line2D(0, 0, 1)
Line2D.Y_AXIS = Line2D(0, 1, 0)
Line2D.UNITY = Line2D(1, 1, 1)
