"""
Collineations and correlations of the projective line, plane and space.

A transformation holds two matrices:
    - matrix:      acts on point coordinates
    - matrix_dual: acts on hyperplane coordinates (inverse transpose)

Collineations send points to points and hyperplanes to hyperplanes;
correlations send points to hyperplanes and hyperplanes to points. In
space both kinds also act on lines through a 6x6 matrix on Plücker
coordinates, derived lazily from the images of the reference points.

Transformations are built either from an explicit non-singular matrix with
its CoordinateType, or from N + 2 correspondences via the canonical
transformation: if A maps the canonical frame to the pre-images and B maps
it to the images, the transformation is B A^-1.

Example:
    >>> frame = [Point2D.UNITY, Point2D.ORIGIN, Point2D.INFINITY_X, Point2D.INFINITY_Y]
    >>> images = [Point2D(1, 1, 2), Point2D(1, 3, 1), Point2D(1, 2, 5), Point2D(1, 4, 4)]
    >>> collineation = Collineation2D.from_correspondences(frame, images)
    >>> collineation.map(Point2D.ORIGIN) == Point2D(1, 3, 1)
    True
"""

from __future__ import annotations
import logging
import math
from typing import Iterable, Iterator, List, Optional, Sequence

import torch

from ..core.base import HVector
from ..core.constants import COMPLEX_DTYPE, MIN_CENTRAL_FACTOR
from ..core.precision import coerce_zero, format_complex, is_zero, to_complex_matrix
from ..core.types import CoordinateType, MatrixLike, Scalar
from ..utils.random import RandomSource, resolve_rng
from .algebra import canonical_transformation, dot_product, linear_dependent_factors, plucker_product
from .complexes import Line3D
from .plane import Line2D, Point2D
from .projective_line import Element1D
from .space import Plane3D, Point3D


logger = logging.getLogger(__name__)


# =============================================================================
# Lazy Mapping
# =============================================================================

class MappedSequence:
    """
    Lazy sequence of images of a finite collection.

    Each iteration maps the elements again, one at a time, so the sequence
    can be iterated any number of times.
    """

    def __init__(self, transformation: ProjectiveTransformation, elements: Iterable[HVector]):
        self._transformation = transformation
        if iter(elements) is elements:
            elements = tuple(elements)
        self._elements = elements

    def __iter__(self) -> Iterator[Optional[HVector]]:
        for element in self._elements:
            yield self._transformation.map(element)

    def __len__(self) -> int:
        return len(self._elements)


# =============================================================================
# Base Transformation
# =============================================================================

class ProjectiveTransformation:
    """
    Matrix pair of a collineation or correlation.

    Subclasses declare the entity types they act on:
        size            - number of homogeneous coordinates
        point_type      - type mapped with matrix
        hyperplane_type - type mapped with matrix_dual (None in 1D)
        is_correlation  - whether points and hyperplanes are exchanged
    """

    size: int = 0
    point_type: type = HVector
    hyperplane_type: Optional[type] = None
    is_correlation: bool = False

    def __init__(self, matrix: MatrixLike, coordinate_type: CoordinateType = CoordinateType.POINTWISE):
        """
        Initialize from a non-singular matrix.

        Args:
            matrix: Square matrix of shape (size, size)
            coordinate_type: POINTWISE if the matrix acts on points,
                             HYPERPLANEWISE if it acts on hyperplanes

        Raises:
            ValueError: If the matrix is not square, has the wrong size, or
                        is singular
        """
        matrix = coerce_zero(to_complex_matrix(matrix))
        if matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Expected a square matrix, got shape {tuple(matrix.shape)}")
        if matrix.shape[0] != self.size:
            raise ValueError(f"Expected a {self.size}x{self.size} matrix, got shape {tuple(matrix.shape)}")
        if is_zero(torch.linalg.det(matrix).item()):
            raise ValueError("singular matrix")

        inverse_transpose = coerce_zero(torch.linalg.inv(matrix).transpose(0, 1))
        if coordinate_type is CoordinateType.POINTWISE:
            self.matrix, self.matrix_dual = matrix, inverse_transpose
        elif coordinate_type is CoordinateType.HYPERPLANEWISE:
            self.matrix, self.matrix_dual = inverse_transpose, matrix
        else:
            raise ValueError(f"Unknown coordinate type: {coordinate_type}")

    @classmethod
    def from_correspondences(
        cls,
        preimages: Sequence[HVector],
        images: Sequence[HVector]
    ) -> ProjectiveTransformation:
        """
        Transformation sending N + 2 pre-images in general position to N + 2 images.

        Pre-images must all be points or all be hyperplanes. Images must be
        of the same kind for a collineation, of the dual kind for a correlation.

        Raises:
            ValueError: On wrong counts or dependent elements
            TypeError: On element types this transformation does not map
        """
        preimages, images = list(preimages), list(images)
        count = cls.size + 1
        if len(preimages) != count or len(images) != count:
            raise ValueError(f"{count} images and {count} pre-images required")

        preimage_type = cls._kind(preimages)
        image_type = cls._kind(images)
        if image_type is not cls._image_type(preimage_type):
            raise TypeError(
                f"{cls.__name__} cannot map {preimage_type.__name__} to {image_type.__name__}"
            )

        a = canonical_transformation(preimages)
        b = canonical_transformation(images)
        matrix = coerce_zero(b @ torch.linalg.inv(a))
        if preimage_type is cls.point_type:
            return cls(matrix, CoordinateType.POINTWISE)
        return cls(matrix, CoordinateType.HYPERPLANEWISE)

    @classmethod
    def _kind(cls, elements: Sequence[HVector]) -> type:
        for kind in (cls.point_type, cls.hyperplane_type):
            if kind is not None and all(isinstance(e, kind) for e in elements):
                return kind
        raise TypeError(f"{cls.__name__} expects all points or all hyperplanes")

    @classmethod
    def _image_type(cls, kind: type) -> type:
        if not cls.is_correlation or cls.hyperplane_type is None:
            return kind
        return cls.hyperplane_type if kind is cls.point_type else cls.point_type

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def map(self, element):
        """
        Image of an element, or a lazy sequence of images for an iterable.

        Returns:
            The image, None if it is undefined, or a MappedSequence

        Raises:
            TypeError: If the element type is not mapped by this transformation
        """
        if not isinstance(element, HVector):
            return MappedSequence(self, element)
        if isinstance(element, self.point_type):
            image = element.multiply(self.matrix)
            image_type = self._image_type(self.point_type)
        elif self.hyperplane_type is not None and isinstance(element, self.hyperplane_type):
            image = element.multiply(self.matrix_dual)
            image_type = self._image_type(self.hyperplane_type)
        else:
            return self._map_other(element)
        return None if image is None else image_type(image)

    def _map_other(self, element: HVector):
        raise TypeError(f"{type(self).__name__} cannot map {type(element).__name__}")

    def __repr__(self) -> str:
        rows = [
            "[" + ", ".join(format_complex(v) for v in row) + "]"
            for row in self.matrix.tolist()
        ]
        return f"{type(self).__name__}([{', '.join(rows)}])"


class _Collineation(ProjectiveTransformation):
    """Collineation operations shared by all dimensions."""

    def inverse(self):
        return type(self)(torch.linalg.inv(self.matrix), CoordinateType.POINTWISE)

    def compose(self, other):
        """Collineation applying this one first, then other."""
        if type(other) is not type(self):
            raise TypeError(f"Cannot compose {type(self).__name__} with {type(other).__name__}")
        return type(self)(other.matrix @ self.matrix, CoordinateType.POINTWISE)


class _SpatialLineMap:
    """Action on Line3D via the induced 6x6 matrix on Plücker coordinates."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._line_matrix = None

    @property
    def line_matrix(self) -> torch.Tensor:
        """
        Images of the basis lines p01, p02, p03, p23, p31, p12 as columns.

        Basis line e_i ^ e_j maps to the Plücker product of columns i and j
        of the point matrix.
        """
        if self._line_matrix is None:
            columns = self.matrix.transpose(0, 1)
            pairs = [(0, 1), (0, 2), (0, 3), (2, 3), (3, 1), (1, 2)]
            self._line_matrix = torch.stack(
                [plucker_product(columns[i], columns[j]) for i, j in pairs], dim=1
            )
        return self._line_matrix

    def _map_other(self, element: HVector):
        if isinstance(element, Line3D):
            image = element.multiply(self.line_matrix)
            if image is None:
                return None
            if self.is_correlation:
                return Line3D(image, CoordinateType.HYPERPLANEWISE)
            return Line3D(image, CoordinateType.POINTWISE)
        raise TypeError(f"{type(self).__name__} cannot map {type(element).__name__}")


# =============================================================================
# Projective Line
# =============================================================================

class Collineation1D(_Collineation):
    """Projectivity of the projective line."""

    size = 2
    point_type = Element1D


# =============================================================================
# Projective Plane
# =============================================================================

class Collineation2D(_Collineation):
    """Collineation of the projective plane."""

    size = 3
    point_type = Point2D
    hyperplane_type = Line2D

    @classmethod
    def create_central_collineation(
        cls,
        center: Point2D,
        axis: Line2D,
        factor: Scalar,
        rng: RandomSource = None
    ) -> Collineation2D:
        """
        Central collineation with a given center, axis and factor.

        For a homology (center not on the axis) the factor is the cross ratio
        (center, axis point, X, X') on every line through the center. For an
        elation (center on the axis) a point X maps to
        X + factor * (axis . X) * center, which does not depend on the
        representatives of the sampled points.

        Raises:
            ValueError: If the factor is numerically zero
        """
        if abs(complex(factor)) < MIN_CENTRAL_FACTOR:
            logger.warning(f"Central collineation factor {factor} is almost zero")
            raise ValueError("The cross ratio factor for the central collineation is too small (almost zero)")
        rng = resolve_rng(rng)

        point1 = axis.get_point(True, [center], rng)
        point2 = axis.get_point(True, [center, point1], rng)
        preimages = [point1, point2]
        images = [point1, point2]

        if not axis.is_incident(center):
            logger.debug(f"Homology with center {center}, axis {axis}, factor {factor}")
            line = center.get_line(True, [axis, center.join(point1), center.join(point2)], rng)
            meeting = line.meet(axis)
            extra = line.get_point(True, [center, meeting], rng)
            a, b = linear_dependent_factors(center, meeting, extra)
            image = Point2D(a * center.to_tensor() + complex(factor) * b * meeting.to_tensor())
            preimages += [center, extra]
            images += [center, image]
            return cls.from_correspondences(preimages, images)

        logger.debug(f"Elation with center {center}, axis {axis}, factor {factor}")
        line = center.get_line(True, [axis], rng)
        extra = line.get_point(True, [center], rng)
        step = complex(factor) * dot_product(axis, extra)
        image = Point2D(extra.to_tensor() + step * center.to_tensor())
        extra2, image2 = _perspective_pair(center, axis, [point1, point2], extra, image, [line], rng)
        preimages += [extra, extra2]
        images += [image, image2]
        return cls.from_correspondences(preimages, images)

    @classmethod
    def create_central_collineation_from_points(
        cls,
        center: Point2D,
        axis: Line2D,
        pre_image: Point2D,
        image: Point2D,
        rng: RandomSource = None
    ) -> Collineation2D:
        """
        Central collineation with a given center and axis mapping pre_image to image.

        Raises:
            ValueError: If pre_image or image equals the center or lies on the
                        axis, or center, pre_image and image are not collinear
        """
        if pre_image == center:
            raise ValueError("The pre-image must not be equal to the center of the central collineation")
        if image == center:
            raise ValueError("The image must not be equal to the center of the central collineation")
        if axis.is_incident(pre_image):
            raise ValueError("The pre-image must not lie on the axis of the central collineation")
        if axis.is_incident(image):
            raise ValueError("The image must not lie on the axis of the central collineation")

        line = pre_image.join(image)
        if line is None:
            return cls(torch.eye(3, dtype=COMPLEX_DTYPE), CoordinateType.POINTWISE)
        if not center.is_incident(line):
            raise ValueError("The pre-image, the image and the center must be collinear")
        rng = resolve_rng(rng)

        meeting = line.meet(axis)
        point1 = axis.get_point(True, [center, meeting], rng)
        point2 = axis.get_point(True, [center, meeting, point1], rng)
        preimages = [pre_image, point1, point2]
        images = [image, point1, point2]

        if not axis.is_incident(center):
            preimages.append(center)
            images.append(center)
        else:
            extra, extra_image = _perspective_pair(
                center, axis, [point1, point2], pre_image, image, [line], rng
            )
            preimages.append(extra)
            images.append(extra_image)
        return cls.from_correspondences(preimages, images)


class Correlation2D(ProjectiveTransformation):
    """Correlation of the projective plane: points to lines and lines to points."""

    size = 3
    point_type = Point2D
    hyperplane_type = Line2D
    is_correlation = True


def _perspective_pair(
    center: Point2D,
    axis: Line2D,
    axis_points: List[Point2D],
    pre_image: Point2D,
    image: Point2D,
    exclude_lines: List[Line2D],
    rng
):
    """
    Second correspondence of a central collineation, constructed through the axis.

    A new point Y on a fresh line through the center maps to
    ((X v Y) ^ axis v X') ^ (center v Y), where X -> X' is a known pair.
    """
    line = center.get_line(True, [axis] + exclude_lines, rng)
    exclude = [center]
    for point in axis_points:
        joined = pre_image.join(point)
        crossing = None if joined is None else joined.meet(line)
        if crossing is not None:
            exclude.append(crossing)
    extra = line.get_point(True, exclude, rng)
    construction = pre_image.join(extra).meet(axis)
    extra_image = construction.join(image).meet(line)
    return extra, extra_image


# =============================================================================
# Projective Space
# =============================================================================

class Collineation3D(_SpatialLineMap, _Collineation):
    """Collineation of projective space; also maps lines."""

    size = 4
    point_type = Point3D
    hyperplane_type = Plane3D


class Correlation3D(_SpatialLineMap, ProjectiveTransformation):
    """Correlation of projective space: points to planes, planes to points, lines to lines."""

    size = 4
    point_type = Point3D
    hyperplane_type = Plane3D
    is_correlation = True

    @classmethod
    def create_polarity_sphere(cls, center: Point3D, radius: float) -> Correlation3D:
        """
        Polarity of the sphere with the given real center and radius.

        Each point maps to its polar plane: the center to the plane at
        infinity, a point of the sphere to its tangent plane, a direction to
        the diametral plane perpendicular to it.

        Raises:
            ValueError: If the center is not real or is at infinity
        """
        if not center.is_real():
            raise ValueError("Center of sphere must be a real point")
        c = center.to_affine()
        if c is None:
            raise ValueError("Center of sphere must not be at infinity")
        c = c.real.tolist()
        logger.debug(f"Polarity of sphere with center {c} and radius {radius}")

        def offset(dx: float, dy: float, dz: float) -> Point3D:
            return Point3D.from_affine(c[0] + dx, c[1] + dy, c[2] + dz)

        step = radius / math.sqrt(3)
        special_point = offset(step, step, step)
        special_plane = Plane3D.from_normal([1, 1, 1]).meet(Plane3D.INFINITY).join(special_point)

        north, south = offset(0, 0, radius), offset(0, 0, -radius)
        east, west = offset(0, radius, 0), offset(0, -radius, 0)
        front, back = offset(radius, 0, 0), offset(-radius, 0, 0)

        front_plane = east.join(west, north)
        azimuth_plane = back.join(front, north)
        horizontal_plane = back.join(front, west)

        preimages = [
            special_point,
            center,
            north.join(south).meet(Plane3D.INFINITY),
            east.join(west).meet(Plane3D.INFINITY),
            front.join(back).meet(Plane3D.INFINITY),
        ]
        images = [special_plane, Plane3D.INFINITY, horizontal_plane, azimuth_plane, front_plane]
        return cls.from_correspondences(preimages, images)
