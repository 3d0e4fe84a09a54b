"""
Algebraic algorithms on homogeneous coordinates.

Products:
    cross_product(a, b)    - 2D join/meet, 3 coordinates each
    plucker_product(p, q)  - 3D line from two points or two planes,
                             giving (p01, p02, p03, p23, p31, p12)

Frames and invariants:
    canonical_transformation(vectors) - matrix mapping the canonical frame
                                        (standard basis + unit vector) onto
                                        N + 2 given vectors
    cross_ratio(a, b, c, d)           - projective invariant of four elements
                                        of one pencil

The cross ratio uses a, b, c as origin, infinity and unity of the pencil:
cross_ratio(a, b, c, a) = 0, cross_ratio(a, b, c, b) = infinity and
cross_ratio(a, b, c, c) = 1.
"""

from __future__ import annotations
import logging
import math
from typing import Iterable, Optional, Sequence, Tuple, Union

import torch

from ..core.base import HVector, NotCollinearError
from ..core.precision import (
    coerce_zero,
    equals_within_precision,
    is_valid,
    is_zero,
    linear_dependant,
    to_complex_tensor,
)
from ..core.types import CoordinatesLike


logger = logging.getLogger(__name__)

VectorLike = Union[HVector, CoordinatesLike]


def _tensor(value: VectorLike) -> torch.Tensor:
    if isinstance(value, HVector):
        return value.to_tensor()
    return to_complex_tensor(value)


# =============================================================================
# Products
# =============================================================================

def dot_product(first: VectorLike, second: VectorLike) -> complex:
    """Bilinear (not Hermitian) dot product of two coordinate vectors."""
    a, b = _tensor(first), _tensor(second)
    if a.numel() != b.numel():
        raise ValueError(f"Cannot pair {a.numel()} with {b.numel()} coordinates")
    return complex(torch.dot(a, b).item())


def cross_product(first: VectorLike, second: VectorLike) -> torch.Tensor:
    """
    Cross product of two 3-vectors.

    Joins two 2D points into a line, or meets two 2D lines in a point.
    """
    a, b = _tensor(first), _tensor(second)
    if a.numel() != 3 or b.numel() != 3:
        raise ValueError("Cross product requires 3 coordinates")
    return torch.stack([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


def plucker_product(first: VectorLike, second: VectorLike) -> torch.Tensor:
    """
    Plücker coordinates (p01, p02, p03, p23, p31, p12) of two 4-vectors.

    For two points this gives the pointwise coordinates of their joining
    line, for two planes the planewise coordinates of their common line.
    """
    p, q = _tensor(first), _tensor(second)
    if p.numel() != 4 or q.numel() != 4:
        raise ValueError("Plücker product requires 4 coordinates")
    return torch.stack([
        p[0] * q[1] - p[1] * q[0],
        p[0] * q[2] - p[2] * q[0],
        p[0] * q[3] - p[3] * q[0],
        p[2] * q[3] - p[3] * q[2],
        p[3] * q[1] - p[1] * q[3],
        p[1] * q[2] - p[2] * q[1],
    ])


# =============================================================================
# Linear Dependence
# =============================================================================

def linear_dependent_factors(
    first: VectorLike,
    second: VectorLike,
    third: VectorLike
) -> Optional[Tuple[complex, complex]]:
    """
    Find (f0, f1) with third = f0 * first + f1 * second.

    Returns:
        The factors, or None if the three vectors are not in one pencil
    """
    a, b, c = _tensor(first), _tensor(second), _tensor(third)
    matrix = torch.stack([a, b], dim=1)
    factors = torch.linalg.lstsq(matrix, c.unsqueeze(1)).solution.squeeze(1)
    if not is_valid(factors):
        return None
    if not equals_within_precision(c, matrix @ factors):
        return None
    f0, f1 = factors.tolist()
    return complex(f0), complex(f1)


def imaginary_hvector(first: HVector, second: HVector, third: HVector) -> Optional[HVector]:
    """
    Invariant imaginary element of the projectivity ABC -> BCA.

    The result and its complex conjugate are the two fixed elements of the
    cyclic projectivity on the pencil through A, B and C.

    Returns:
        Element of the same type as ``first``, or None if the three
        elements are not in one pencil
    """
    factors = linear_dependent_factors(first, second, third)
    if factors is None:
        return None
    rotation = complex(0.5, 0.5 * math.sqrt(3))
    vector = rotation * factors[0] * first.to_tensor() + factors[1] * second.to_tensor()
    if is_zero(vector):
        return None
    return first._with_vector(vector)


# =============================================================================
# Canonical Transformation
# =============================================================================

def canonical_transformation(hvectors: Sequence[VectorLike]) -> torch.Tensor:
    """
    Matrix mapping the canonical frame onto N + 2 homogeneous vectors.

    The canonical frame is the unit vector (1, .., 1) followed by the
    standard basis. Vector 0 is the image of the unit vector, vectors
    1 .. N + 1 are the images of the basis vectors.

    Args:
        hvectors: N + 2 vectors with N + 1 coordinates each, N in {1, 2, 3}

    Returns:
        Complex matrix of shape (N + 1, N + 1)

    Raises:
        ValueError: On a wrong count or size, or if any N + 1 of the
                    vectors are linearly dependent
    """
    vectors = [_tensor(h) for h in hvectors]
    if len(vectors) not in (3, 4, 5):
        raise ValueError(f"Expected 3, 4 or 5 homogeneous vectors, got {len(vectors)}")
    size = len(vectors) - 1
    for v in vectors:
        if v.numel() != size:
            raise ValueError(f"Expected {size} coordinates per vector, got {v.numel()}")

    columns = torch.stack(vectors[1:], dim=1)
    if is_zero(torch.linalg.det(columns).item()):
        logger.debug("Canonical transformation: basis images are dependent")
        raise ValueError("homogeneous vectors not linearly independent")

    factors = torch.linalg.solve(columns, vectors[0])
    for f in factors.tolist():
        if not is_valid(f) or is_zero(f):
            logger.debug(f"Canonical transformation: degenerate factor {f}")
            raise ValueError("homogeneous vectors not linearly independent")

    matrix = coerce_zero(columns * factors.unsqueeze(0))
    if is_zero(torch.linalg.det(matrix).item()):
        logger.debug("Canonical transformation: scaled matrix is singular")
        raise ValueError("homogeneous vectors not linearly independent")
    return matrix


# =============================================================================
# Cross Ratio
# =============================================================================

def _check_in_pencil(vectors: Sequence[torch.Tensor]) -> None:
    """Raise NotCollinearError unless the third and fourth vectors lie in the pencil of the first two."""
    from .plane import Point2D
    from .space import Point3D
    from .complexes import Line3D

    size = vectors[0].numel()
    if size == 3:
        line = Point2D(vectors[0]).join(Point2D(vectors[1]))
        if not all(line.is_incident(Point2D(v)) for v in vectors[2:]):
            raise NotCollinearError("elements are not collinear")
    elif size == 4:
        line = Line3D.from_points(Point3D(vectors[0]), Point3D(vectors[1]))
        if not all(line.is_incident(Point3D(v)) for v in vectors[2:]):
            raise NotCollinearError("elements are not collinear")


def cross_ratio(*hvectors) -> complex:
    """
    Cross ratio of four elements of one pencil.

    Can be called with four elements, or with a single Set or iterable of
    four. Elements with 3 coordinates must be collinear (or concurrent),
    elements with 4 coordinates must be collinear (or coaxial).

    Returns:
        Cross ratio; complex(inf, inf) if the fourth element equals the second

    Raises:
        ValueError: Wrong count or sizes, or two of the first three equal
        NotCollinearError: The elements are not in one pencil

    Example:
        >>> cross_ratio(Element1D(1, 0), Element1D(0, 1), Element1D(1, 1), Element1D(1, -1))
        (-1+0j)
    """
    if len(hvectors) == 1:
        hvectors = tuple(hvectors[0])
    if len(hvectors) != 4:
        raise ValueError(f"Cross ratio requires 4 elements, got {len(hvectors)}")

    a, b, c, d = (_tensor(h) for h in hvectors)
    size = a.numel()
    if any(v.numel() != size for v in (b, c, d)):
        raise ValueError("Elements must have the same number of coordinates")
    if size < 2 or size > 4:
        raise ValueError(f"Cross ratio supports 2 to 4 coordinates, got {size}")

    if (linear_dependant(a, b) is not None
            or linear_dependant(a, c) is not None
            or linear_dependant(b, c) is not None):
        raise ValueError("origin, infinity and unity must be different")

    _check_in_pencil([a, b, c, d])

    if linear_dependant(a, d) is not None:
        return complex(0)
    if linear_dependant(c, d) is not None:
        return complex(1)
    if linear_dependant(b, d) is not None:
        return complex(math.inf, math.inf)

    basis = torch.stack([a, b], dim=1)
    x = torch.linalg.lstsq(basis, c.unsqueeze(1)).solution.squeeze(1)
    scaled = basis * x.unsqueeze(0)
    y = torch.linalg.lstsq(scaled, d.unsqueeze(1)).solution.squeeze(1)
    return complex(coerce_zero(complex(y[1].item() / y[0].item())))
