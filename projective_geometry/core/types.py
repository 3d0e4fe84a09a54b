"""
Type aliases and coordinate conventions for projective-geometry.

Coordinate Conventions:
=======================

Homogeneous vectors are 1-D complex tensors of length N + 1 for spatial
dimension N:
    - Element1D:           (x0, x1)
    - Point2D / Line2D:    (x0, x1, x2) / [u0, u1, u2]
    - Point3D / Plane3D:   (x0, x1, x2, x3) / [u0, u1, u2, u3]
    - LinearComplex/Line3D: (p01, p02, p03, p23, p31, p12)

For points the first coordinate is the weight: x0 = 0 means the point lies
at infinity, otherwise (x1 / x0, ..) are its affine coordinates.

Pointwise vs. Hyperplanewise:
-----------------------------
Matrices and 6-vectors are ambiguous until it is known whether they act on
point coordinates (contravariant) or on hyperplane coordinates
(covariant). CoordinateType carries that information explicitly.
"""

from enum import Enum
from typing import Sequence, Union

import numpy as np
import torch


# =============================================================================
# Coordinate Type
# =============================================================================

class CoordinateType(Enum):
    """Whether coordinates are derived from points or from hyperplanes."""

    # Point coordinates, contravariant
    POINTWISE = 0

    # Line coordinates in 2D, plane coordinates in 3D, covariant
    HYPERPLANEWISE = 1


# =============================================================================
# Basic Type Aliases
# =============================================================================

# A single complex or real coordinate
Scalar = Union[complex, float, int]

# Anything convertible to a 1-D complex coordinate tensor
CoordinatesLike = Union[Sequence[Scalar], np.ndarray, torch.Tensor]

# Anything convertible to a 2-D complex matrix
MatrixLike = Union[Sequence[Sequence[Scalar]], np.ndarray, torch.Tensor]
