"""
Linear complexes and lines of projective space.

A linear complex is given by six coordinates (p01, p02, p03, p23, p31, p12).
It carries two coordinate vectors at once:
    - pointwise vector v, as obtained from the Plücker product of two points
    - planewise vector d, as obtained from the Plücker product of two planes
related by the index permutation 0 <-> 3, 1 <-> 4, 2 <-> 5.

The self pairing v0 d0 + v1 d1 + v2 d2 vanishes iff the complex is special,
i.e. consists of all lines meeting one line. Line3D is exactly that case.
A non-special complex is a null polarity: every point P has a null plane
containing all lines of the complex through P.

Antisymmetric 4x4 matrices built from v and d give joins and meets:
    matrix_point_to_plane @ P  - plane through the line and P
    matrix_plane_to_point @ u  - point where the line meets u
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, TYPE_CHECKING

import torch

from ..core.base import AlgorithmError, HVector
from ..core.constants import (
    COMPLEX_DTYPE,
    INCIDENCE_TOLERANCE_FACTOR,
    LINE_COMBINATION_BOUND,
    PRECISION_ZERO,
    SPECIAL_TOLERANCE_FACTOR,
)
from ..core.precision import coerce_zero, is_zero, to_complex_tensor
from ..core.types import CoordinateType, CoordinatesLike
from ..utils.random import (
    RandomSource,
    pick_integer,
    pick_random_hvector,
    pick_sign,
    resolve_rng,
    shuffled,
)
from .algebra import plucker_product
from .space import Plane3D, Point3D

if TYPE_CHECKING:
    from .transforms import Correlation3D


logger = logging.getLogger(__name__)

# Index permutation between pointwise and planewise coordinates
DUAL_INDEX: List[int] = [3, 4, 5, 0, 1, 2]

DEFAULT_SAMPLE_COUNT = 5


def antisymmetric_matrix(values: torch.Tensor) -> torch.Tensor:
    """4x4 antisymmetric matrix of six Plücker-like coordinates."""
    matrix = torch.zeros(4, 4, dtype=COMPLEX_DTYPE)
    matrix[0, 1] = values[0]
    matrix[0, 2] = values[1]
    matrix[0, 3] = values[2]
    matrix[1, 2] = values[5]
    matrix[1, 3] = -values[4]
    matrix[2, 3] = values[3]
    return matrix - matrix.transpose(0, 1)


def _append_unique(elements: list, element) -> None:
    if element is not None and all(element != e for e in elements):
        elements.append(element)


class LinearComplex(HVector):
    """
    Linear line complex in projective space.

    Can be constructed from:
    - Pointwise coordinates: LinearComplex(values) or LinearComplex(p01, ..., p12)
    - Planewise coordinates: LinearComplex(values, CoordinateType.HYPERPLANEWISE)
      or LinearComplex(u01, ..., u12, CoordinateType.HYPERPLANEWISE)
    """

    coordinate_count = 6

    def __init__(
        self,
        *values,
        coordinate_type: Optional[CoordinateType] = None,
        name: Optional[str] = None
    ):
        """
        Initialize a LinearComplex.

        Args:
            *values: Six coordinates, or a single sequence/tensor/HVector,
                     optionally followed by the CoordinateType
            coordinate_type: Whether values are pointwise (default) or planewise
            name: Optional label

        Raises:
            ValueError: On invalid coordinates or coordinate type
            TypeError: If the coordinate type is given twice
        """
        if values and isinstance(values[-1], CoordinateType):
            if coordinate_type is not None:
                raise TypeError("Coordinate type given both positionally and by keyword")
            values, coordinate_type = values[:-1], values[-1]
        if coordinate_type is None:
            coordinate_type = CoordinateType.POINTWISE
        super().__init__(*values, name=name)
        if coordinate_type is CoordinateType.POINTWISE:
            self._dual = self._vector[DUAL_INDEX]
        elif coordinate_type is CoordinateType.HYPERPLANEWISE:
            self._dual = self._vector
            self._vector = self._dual[DUAL_INDEX]
        else:
            raise ValueError(f"Unknown coordinate type: {coordinate_type}")

        self._matrix_plane_to_point = None
        self._matrix_point_to_plane = None
        self._null_polarity = None
        self._line = None
        self._axis = None

    def _with_vector(self, vector: torch.Tensor) -> LinearComplex:
        return type(self)(vector, CoordinateType.POINTWISE)

    # -------------------------------------------------------------------------
    # Coordinates and Matrices
    # -------------------------------------------------------------------------

    @property
    def values_pointwise(self) -> torch.Tensor:
        return self._vector.clone()

    @property
    def values_planewise(self) -> torch.Tensor:
        return self._dual.clone()

    @property
    def matrix_plane_to_point(self) -> torch.Tensor:
        """Antisymmetric matrix sending a plane to its null point."""
        if self._matrix_plane_to_point is None:
            self._matrix_plane_to_point = antisymmetric_matrix(self._vector)
        return self._matrix_plane_to_point

    @property
    def matrix_point_to_plane(self) -> torch.Tensor:
        """Antisymmetric matrix sending a point to its null plane."""
        if self._matrix_point_to_plane is None:
            self._matrix_point_to_plane = antisymmetric_matrix(self._dual)
        return self._matrix_point_to_plane

    @property
    def _scalar(self) -> complex:
        return coerce_zero(complex(torch.dot(self._vector[:3], self._dual[:3]).item()))

    @property
    def is_special(self) -> bool:
        """True if the complex consists of the lines meeting a single line."""
        return abs(self._scalar) <= SPECIAL_TOLERANCE_FACTOR * PRECISION_ZERO

    def to_line(self) -> Optional[Line3D]:
        """The line of a special complex, None otherwise."""
        if not self.is_special:
            return None
        if self._line is None:
            self._line = Line3D(self._vector, CoordinateType.POINTWISE)
        return self._line

    def contains(self, line: Line3D) -> bool:
        if not isinstance(line, Line3D):
            raise TypeError(f"Expected Line3D, got {type(line).__name__}")
        pairing = torch.dot(self._vector, line._dual).item()
        return abs(pairing) < INCIDENCE_TOLERANCE_FACTOR * PRECISION_ZERO

    # -------------------------------------------------------------------------
    # Screw Parameters
    # -------------------------------------------------------------------------

    @property
    def pitch(self) -> complex:
        """Pitch of the associated screw; zero for a special complex."""
        if self.is_special:
            return complex(0)
        v = self._vector
        return self._scalar / complex((v[0] ** 2 + v[1] ** 2 + v[2] ** 2).item())

    @property
    def axis(self) -> Line3D:
        """Axis of the associated screw; the line itself for a special complex."""
        if self._axis is None:
            if self.is_special:
                self._axis = self.to_line()
            else:
                direction = self._vector[:3]
                moment = self._dual[:3] - self.pitch * direction
                self._axis = Line3D.from_direction_moment(direction, moment)
        return self._axis

    @property
    def null_polarity(self) -> Optional[Correlation3D]:
        """
        Correlation sending each point to its null plane.

        Returns:
            The polarity, or None for a special complex
        """
        from .transforms import Correlation3D

        if self.is_special:
            return None
        if self._null_polarity is None:
            self._null_polarity = Correlation3D(self.matrix_point_to_plane, CoordinateType.POINTWISE)
        return self._null_polarity

    def null_plane(self, point: Point3D) -> Optional[Plane3D]:
        """Null plane of a point; None if the point lies on the line of a special complex."""
        image = point.multiply(self.matrix_point_to_plane)
        return None if image is None else Plane3D(image)

    def null_point(self, plane: Plane3D) -> Optional[Point3D]:
        """Null point of a plane; None if the plane contains the line of a special complex."""
        image = plane.multiply(self.matrix_plane_to_point)
        return None if image is None else Point3D(image)

    # -------------------------------------------------------------------------
    # Lines of the Complex
    # -------------------------------------------------------------------------

    def get_lines(
        self,
        count: int = DEFAULT_SAMPLE_COUNT,
        real: bool = True,
        point: Optional[Point3D] = None,
        plane: Optional[Plane3D] = None,
        rng: RandomSource = None
    ) -> List[Line3D]:
        """
        Random lines belonging to this complex.

        Args:
            count: Number of lines
            real: Sample real coordinates
            point: If given, all lines pass through this point
            plane: If given, all lines lie in this plane
            rng: Random source

        Returns:
            List of count distinct lines

        Raises:
            ValueError: If both point and plane are given
        """
        if point is not None and plane is not None:
            raise ValueError("Give either a point or a plane, not both")
        rng = resolve_rng(rng)
        lines: List[Line3D] = []

        if point is not None:
            carrier = self.null_plane(point)
            while len(lines) < count:
                if carrier is None:
                    line = point.get_line(real=real, rng=rng)
                else:
                    line = point.get_line(carrier, real=real, rng=rng)
                _append_unique(lines, line)
            return lines

        if plane is not None:
            center = self.null_point(plane)
            while len(lines) < count:
                if center is None:
                    line = plane.get_line(real=real, rng=rng)
                else:
                    line = plane.get_line(center, real=real, rng=rng)
                _append_unique(lines, line)
            return lines

        while len(lines) < count:
            start = Point3D(pick_random_hvector(4, real, rng))
            carrier = self.null_plane(start)
            if carrier is None:
                logger.debug(f"Point {start} lies on the line of the complex, resampling")
                continue
            _append_unique(lines, start.get_line(carrier, real=real, rng=rng))
        return lines


class Line3D(LinearComplex):
    """
    Line of projective space: a special linear complex.

    Example:
        >>> line = Line3D.from_points(Point3D.ORIGIN, Point3D.INFINITY_X)
        >>> line == Line3D.X_AXIS
        True
    """

    def __init__(
        self,
        *values,
        coordinate_type: Optional[CoordinateType] = None,
        name: Optional[str] = None
    ):
        super().__init__(*values, coordinate_type=coordinate_type, name=name)
        if not self.is_special:
            raise ValueError("Coordinates describe a non-special complex, not a line")
        self._base_points_cache = None
        self._base_planes_cache = None

    @classmethod
    def from_points(cls, first: Point3D, second: Point3D) -> Optional[Line3D]:
        """Line through two points; None if the points are equal."""
        vector = plucker_product(first.to_tensor(), second.to_tensor())
        if is_zero(vector):
            return None
        return cls(vector, CoordinateType.POINTWISE)

    @classmethod
    def from_planes(cls, first: Plane3D, second: Plane3D) -> Optional[Line3D]:
        """Common line of two planes; None if the planes are equal."""
        vector = plucker_product(first.to_tensor(), second.to_tensor())
        if is_zero(vector):
            return None
        return cls(vector, CoordinateType.HYPERPLANEWISE)

    @classmethod
    def from_direction_moment(cls, direction: CoordinatesLike, moment: CoordinatesLike) -> Line3D:
        """Line with direction vector (p01, p02, p03) and moment vector (p23, p31, p12)."""
        values = torch.cat([to_complex_tensor(direction), to_complex_tensor(moment)])
        return cls(values, CoordinateType.POINTWISE)

    def to_line(self) -> Line3D:
        return self

    @property
    def direction_vector(self) -> torch.Tensor:
        return self._vector[:3].clone()

    @property
    def moment_vector(self) -> torch.Tensor:
        return self._dual[:3].clone()

    # -------------------------------------------------------------------------
    # Incidence, Join and Meet
    # -------------------------------------------------------------------------

    def join(self, other) -> Optional[Plane3D]:
        """
        Plane through this line and a point or an intersecting line.

        Returns:
            The plane, or None if the point is on the line, or the lines are
            equal or skew

        Raises:
            AlgorithmError: If no common plane of two intersecting lines is found
        """
        if isinstance(other, Point3D):
            image = other.multiply(self.matrix_point_to_plane)
            return None if image is None else Plane3D(image)
        if isinstance(other, Line3D):
            if self == other or not self.is_incident(other):
                return None
            for point in other._reference_points():
                plane = self.join(point)
                if plane is not None:
                    return plane
            raise AlgorithmError("Common plane of two distinct incident lines not found")
        raise TypeError(f"Cannot join Line3D with {type(other).__name__}")

    def meet(self, other) -> Optional[Point3D]:
        """
        Point where this line meets a plane or an intersecting line.

        Returns:
            The point, or None if the line lies in the plane, or the lines
            are equal or skew

        Raises:
            AlgorithmError: If no common point of two intersecting lines is found
        """
        if isinstance(other, Plane3D):
            image = other.multiply(self.matrix_plane_to_point)
            return None if image is None else Point3D(image)
        if isinstance(other, Line3D):
            if self == other or not self.is_incident(other):
                return None
            for plane in other._reference_planes():
                point = self.meet(plane)
                if point is not None:
                    return point
            raise AlgorithmError("Common point of two distinct incident lines not found")
        raise TypeError(f"Cannot meet Line3D with {type(other).__name__}")

    def is_incident(self, other) -> bool:
        """Incidence with a point, a plane, or another line (the lines intersect)."""
        if isinstance(other, Point3D):
            return self.join(other) is None
        if isinstance(other, Plane3D):
            return self.meet(other) is None
        if isinstance(other, Line3D):
            return self.contains(other)
        raise TypeError(f"Expected Point3D, Plane3D or Line3D, got {type(other).__name__}")

    def is_imaginary_first_kind(self) -> bool:
        """Imaginary line meeting its conjugate (it has one real point and one real plane)."""
        return not self.is_real() and self.is_incident(self.conjugate)

    def is_imaginary_second_kind(self) -> bool:
        """Imaginary line skew to its conjugate (it has no real point or plane)."""
        return not self.is_real() and not self.is_incident(self.conjugate)

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def _reference_points(self) -> List[Point3D]:
        """Distinct meets with the faces of the reference tetrahedron; at least two."""
        points: List[Point3D] = []
        for plane in (Plane3D.INFINITY, Plane3D.XY, Plane3D.XZ, Plane3D.YZ):
            _append_unique(points, self.meet(plane))
        return points

    def _reference_planes(self) -> List[Plane3D]:
        """Distinct joins with the vertices of the reference tetrahedron; at least two."""
        planes: List[Plane3D] = []
        for point in (Point3D.ORIGIN, Point3D.INFINITY_X, Point3D.INFINITY_Y, Point3D.INFINITY_Z):
            _append_unique(planes, self.join(point))
        return planes

    def _base_points(self) -> List[Point3D]:
        """Reference points, plus the real point of an imaginary line of the first kind."""
        if self._base_points_cache is None:
            points = self._reference_points()
            if self.is_imaginary_first_kind():
                _append_unique(points, self.meet(self.conjugate))
            self._base_points_cache = points
        return list(self._base_points_cache)

    def _base_planes(self) -> List[Plane3D]:
        """Reference planes, plus the real plane of an imaginary line of the first kind."""
        if self._base_planes_cache is None:
            planes = self._reference_planes()
            if self.is_imaginary_first_kind():
                _append_unique(planes, self.join(self.conjugate))
            self._base_planes_cache = planes
        return list(self._base_planes_cache)

    def _sample(self, candidates: list, kind: str, count: int, real: bool, rng) -> list:
        if real and not self.is_real():
            real_elements = [e for e in candidates if e.is_real()]
            if self.is_imaginary_first_kind():
                if len(real_elements) != 1:
                    raise AlgorithmError(
                        f"Inconsistent real {kind}s for an imaginary line of the first kind"
                    )
                return real_elements
            if real_elements:
                raise AlgorithmError(
                    f"Inconsistent real {kind}s for an imaginary line of the second kind"
                )
            return []

        elements = shuffled(candidates, rng)
        first, second = elements[0].to_tensor(), elements[1].to_tensor()
        bound = 2 * count
        while len(elements) < count:
            a = pick_sign(rng) * pick_integer(1, bound, rng)
            b = pick_sign(rng) * pick_integer(1, bound, rng)
            _append_unique(elements, type(elements[0])(a * first + b * second))
        return elements[:count]

    def get_points(self, count: int = DEFAULT_SAMPLE_COUNT, real: bool = True, rng: RandomSource = None) -> List[Point3D]:
        """
        Points on this line.

        For an imaginary line with real=True the result is its single real
        point (first kind) or empty (second kind).

        Raises:
            AlgorithmError: If the real points found contradict the line's kind
        """
        return self._sample(self._base_points(), "point", count, real, resolve_rng(rng))

    def get_planes(self, count: int = DEFAULT_SAMPLE_COUNT, real: bool = True, rng: RandomSource = None) -> List[Plane3D]:
        """Planes through this line; see get_points for imaginary lines."""
        return self._sample(self._base_planes(), "plane", count, real, resolve_rng(rng))

    def get_random_incident(
        self,
        real: bool = True,
        exclude: Optional[Iterable[HVector]] = None,
        rng: RandomSource = None
    ) -> Line3D:
        """
        Random line meeting this line.

        Args:
            real: Sample real coordinates for the second point
            exclude: Lines the result must differ from
            rng: Random source
        """
        rng = resolve_rng(rng)
        exclude = list(exclude or [])
        base = self._reference_points()
        first, second = base[0].to_tensor(), base[1].to_tensor()

        while True:
            a = b = 0
            while a == 0 and b == 0:
                a = pick_sign(rng) * pick_integer(0, LINE_COMBINATION_BOUND + 1, rng)
                b = pick_sign(rng) * pick_integer(0, LINE_COMBINATION_BOUND + 1, rng)
            on_line = Point3D(a * first + b * second)

            off_line = Point3D(pick_random_hvector(4, real, rng))
            while self.is_incident(off_line):
                off_line = Point3D(pick_random_hvector(4, real, rng))

            line = Line3D.from_points(on_line, off_line)
            if all(line != e for e in exclude):
                return line
            logger.debug(f"Random incident line {line} excluded, resampling")


Line3D.X_AXIS = Line3D.from_points(Point3D.ORIGIN, Point3D.INFINITY_X)
Line3D.Y_AXIS = Line3D.from_points(Point3D.ORIGIN, Point3D.INFINITY_Y)
Line3D.Z_AXIS = Line3D.from_points(Point3D.ORIGIN, Point3D.INFINITY_Z)
Line3D.INFINITY_YZ = Line3D.from_planes(Plane3D.INFINITY, Plane3D.YZ)
Line3D.INFINITY_XZ = Line3D.from_planes(Plane3D.INFINITY, Plane3D.XZ)
Line3D.INFINITY_XY = Line3D.from_planes(Plane3D.INFINITY, Plane3D.XY)
