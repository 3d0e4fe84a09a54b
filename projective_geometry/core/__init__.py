"""
Core module for projective-geometry.

Contains:
- Constants: Precision tolerances and sampling bounds
- Types: Coordinate type enum and type aliases
- Precision: Zero tests and homogeneous coordinate coercion
- Base: The HVector base class and library exceptions
"""

from .constants import (
    # Numeric precision
    PRECISION_ZERO,
    PRECISION_INFINITY,
    MAX_HOMOGENEOUS_VALUE,
    RESCALE_DIVISOR,
    SNAP_RESOLUTION,
    SPECIAL_TOLERANCE_FACTOR,
    INCIDENCE_TOLERANCE_FACTOR,
    MIN_CENTRAL_FACTOR,
    # Tensor defaults
    COMPLEX_DTYPE,
    # Random sampling
    RANDOM_VALUE_BOUND,
    EXTRA_ZEROS,
    LINE_COMBINATION_BOUND,
)

from .types import (
    CoordinateType,
    Scalar,
    CoordinatesLike,
    MatrixLike,
)

from .precision import (
    to_complex_tensor,
    to_complex_matrix,
    is_zero,
    equals_within_precision,
    is_valid,
    coerce_zero,
    is_homogeneous_real,
    coerce_homogeneous_coordinates,
    linear_dependant,
    format_complex,
    format_vector,
)

from .base import (
    GeometryError,
    AlgorithmError,
    NotCollinearError,
    HVector,
)

__all__ = [
    # Constants
    "PRECISION_ZERO",
    "PRECISION_INFINITY",
    "MAX_HOMOGENEOUS_VALUE",
    "RESCALE_DIVISOR",
    "SNAP_RESOLUTION",
    "SPECIAL_TOLERANCE_FACTOR",
    "INCIDENCE_TOLERANCE_FACTOR",
    "MIN_CENTRAL_FACTOR",
    "COMPLEX_DTYPE",
    "RANDOM_VALUE_BOUND",
    "EXTRA_ZEROS",
    "LINE_COMBINATION_BOUND",
    # Types
    "CoordinateType",
    "Scalar",
    "CoordinatesLike",
    "MatrixLike",
    # Precision
    "to_complex_tensor",
    "to_complex_matrix",
    "is_zero",
    "equals_within_precision",
    "is_valid",
    "coerce_zero",
    "is_homogeneous_real",
    "coerce_homogeneous_coordinates",
    "linear_dependant",
    "format_complex",
    "format_vector",
    # Base
    "GeometryError",
    "AlgorithmError",
    "NotCollinearError",
    "HVector",
]
