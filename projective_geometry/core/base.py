"""
Homogeneous vector base class and library exceptions.

Every geometric entity (Element1D, Point2D, Line2D, Point3D, Plane3D,
LinearComplex, Line3D) is an HVector: a tuple of at least two complex
coordinates, never all zero, stored after homogeneous coercion.

Class Hierarchy:
    HVector
    ├── Element1D
    ├── Point2D, Line2D
    ├── Point3D, Plane3D
    └── LinearComplex
        └── Line3D

Two HVectors compare equal iff one is a complex multiple of the other.
Degenerate operations return None; invalid construction raises ValueError.
"""

from __future__ import annotations
import logging
import numbers
from typing import Iterable, List, Optional

import torch

from .precision import (
    coerce_homogeneous_coordinates,
    format_vector,
    is_valid,
    is_zero,
    linear_dependant,
    to_complex_matrix,
    to_complex_tensor,
)
from ..utils.random import (
    NUMBERS_INCLUDING_MANY_ZEROS,
    NUMBERS_NOT_INCLUDING_ZERO,
    RandomSource,
    pick,
    pick_integer,
    pick_value,
    resolve_rng,
    unit_step,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class GeometryError(Exception):
    """Base exception for projective geometry errors."""
    pass


class AlgorithmError(GeometryError):
    """An algorithmic invariant was violated; indicates an unmodelled edge case."""
    pass


class NotCollinearError(GeometryError):
    """Elements are not in a common pencil (collinear, coplanar or coaxial)."""
    pass


# =============================================================================
# HVector
# =============================================================================

class HVector:
    """
    Homogeneous vector over the complex numbers.

    Can be constructed from:
    - Scalar coordinates: HVector(1, 2, 3)
    - A sequence, numpy array or tensor: HVector([1, 2j, 3])
    - Another HVector (coordinates are copied)

    Subclasses fix the number of coordinates via ``coordinate_count``.
    """

    # Required number of coordinates, None for any count >= 2
    coordinate_count: Optional[int] = None

    def __init__(self, *values, name: Optional[str] = None):
        """
        Initialize an HVector.

        Args:
            *values: Coordinates, or a single sequence/tensor/HVector
            name: Optional label used by callers for display

        Raises:
            ValueError: If fewer than 2 or the wrong number of coordinates
                        are given, or the coordinates are invalid or all zero
        """
        self._vector = self._prepare(self._read_values(values))
        self.name = name
        self._conjugate = None

    @staticmethod
    def _read_values(values: tuple) -> torch.Tensor:
        if len(values) == 1 and not isinstance(values[0], numbers.Number):
            source = values[0]
            if isinstance(source, HVector):
                return source.to_tensor()
            return to_complex_tensor(source)
        return to_complex_tensor(values)

    def _prepare(self, vector: torch.Tensor) -> torch.Tensor:
        """Validate raw coordinates and return their coerced representative."""
        n = vector.numel()
        if n < 2:
            raise ValueError(f"Expected at least 2 coordinates, got {n}")
        if self.coordinate_count is not None and n != self.coordinate_count:
            raise ValueError(f"Expected {self.coordinate_count} coordinates, got {n}")
        if not is_valid(vector):
            raise ValueError("Coordinates must not contain NaN or infinite values")
        if is_zero(vector):
            raise ValueError("Homogeneous coordinates must not all be zero")
        return coerce_homogeneous_coordinates(vector)

    def _with_vector(self, vector: torch.Tensor) -> HVector:
        """Construct an element of the same type from new coordinates."""
        return type(self)(vector)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def to_tensor(self) -> torch.Tensor:
        """Copy of the coerced coordinates as a complex128 tensor."""
        return self._vector.clone()

    def to_list(self) -> List[complex]:
        return self._vector.tolist()

    def __getitem__(self, index: int) -> complex:
        return complex(self._vector[index].item())

    def __len__(self) -> int:
        return self._vector.numel()

    def __iter__(self):
        return iter(self.to_list())

    def is_zero(self) -> bool:
        return is_zero(self._vector)

    def is_real(self) -> bool:
        """True if the element has a real representative."""
        return is_zero(self._vector.imag)

    @property
    def conjugate(self) -> HVector:
        """Complex conjugate element (cached)."""
        if self._conjugate is None:
            self._conjugate = self._with_vector(self._vector.conj())
        return self._conjugate

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def multiply(self, matrix) -> Optional[torch.Tensor]:
        """
        Apply a square matrix to the coordinates.

        Args:
            matrix: Matrix of shape (N, N) where N = len(self)

        Returns:
            Coerced image coordinates, or None if the image is zero

        Raises:
            ValueError: If the matrix has the wrong shape
        """
        if not isinstance(matrix, torch.Tensor):
            matrix = to_complex_matrix(matrix)
        n = len(self)
        if matrix.dim() != 2 or tuple(matrix.shape) != (n, n):
            raise ValueError(f"Expected a {n}x{n} matrix, got shape {tuple(matrix.shape)}")
        image = matrix.to(self._vector.dtype) @ self._vector
        if is_zero(image) or not is_valid(image):
            return None
        return coerce_homogeneous_coordinates(image)

    def _incident(self, other: HVector) -> bool:
        """Raw incidence: the dot product vanishes within precision."""
        if len(self) != len(other):
            raise ValueError(f"Cannot pair {len(self)} with {len(other)} coordinates")
        return is_zero(torch.dot(self._vector, other._vector).item())

    def __eq__(self, other) -> bool:
        if not isinstance(other, HVector):
            return NotImplemented
        return linear_dependant(self._vector, other._vector) is not None

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}{format_vector(self.to_list())}"

    # -------------------------------------------------------------------------
    # Random Incident Elements
    # -------------------------------------------------------------------------

    def get_random_incident(
        self,
        real: bool = True,
        exclude: Optional[Iterable[HVector]] = None,
        rng: RandomSource = None
    ) -> HVector:
        """
        Random small-integer vector w with w . self = 0.

        For two coordinates the incident element is unique. Otherwise random
        coefficients are chosen for all but one coordinate and the last one is
        solved from the incidence equation; zero or excluded results are
        perturbed by integer steps until acceptable.

        Args:
            real: Draw real coefficients only
            exclude: Elements the result must differ from
            rng: Random source

        Returns:
            Incident HVector
        """
        v = self.to_list()
        if len(v) == 2:
            return HVector(-v[1], v[0])

        rng = resolve_rng(rng)
        exclude = list(exclude or [])
        nonzero = [i for i, x in enumerate(v) if not is_zero(x)]

        if len(nonzero) == 1:
            search = self._incident_single_axis(nonzero[0], real, rng)
            zeros = [i for i in range(len(v)) if i != nonzero[0]]
            while _is_excluded(search, exclude):
                logger.debug(f"Random incident {search} excluded, perturbing")
                search = _bump(search, zeros, real, rng)
                while is_zero(to_complex_tensor(search)):
                    search = _bump(search, zeros, real, rng)
            return HVector(search)

        k = pick(nonzero, rng)
        others = [i for i in range(len(v)) if i != k]
        search = [
            pick_value(NUMBERS_INCLUDING_MANY_ZEROS, real, rng) for _ in range(len(v))
        ]
        search = _solve_incident(search, v, k)
        while is_zero(to_complex_tensor(search)):
            search = _solve_incident(_bump(search, others, real, rng), v, k)
        while _is_excluded(search, exclude):
            logger.debug(f"Random incident {search} excluded, perturbing")
            search = _solve_incident(_bump(search, others, real, rng), v, k)
            while is_zero(to_complex_tensor(search)):
                search = _solve_incident(_bump(search, others, real, rng), v, k)
        return HVector(search)

    def _incident_single_axis(self, axis: int, real: bool, rng) -> List[complex]:
        """Incident candidate for a vector with a single nonzero coordinate."""
        n = len(self)
        zeros = [i for i in range(n) if i != axis]
        search = [complex(0)] * n
        for i in zeros:
            search[i] = pick_value(NUMBERS_INCLUDING_MANY_ZEROS, real, rng)
        forced = pick(zeros, rng)
        search[forced] = pick_value(
            NUMBERS_NOT_INCLUDING_ZERO, real, rng, imaginary_pool=NUMBERS_INCLUDING_MANY_ZEROS
        )
        return search


# =============================================================================
# Helpers
# =============================================================================

def _solve_incident(search: List[complex], vector: List[complex], k: int) -> List[complex]:
    """Set search[k] so that search . vector = 0."""
    search = list(search)
    total = sum(search[i] * vector[i] for i in range(len(vector)) if i != k)
    search[k] = -total / vector[k]
    return search


def _bump(search: List[complex], candidates: List[int], real: bool, rng) -> List[complex]:
    search = list(search)
    index = candidates[pick_integer(0, len(candidates), rng)]
    search[index] += unit_step(real, rng)
    return search


def _is_excluded(search: List[complex], exclude: List[HVector]) -> bool:
    vector = to_complex_tensor(search)
    return any(linear_dependant(vector, e.to_tensor()) is not None for e in exclude)
