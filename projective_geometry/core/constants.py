"""
Centralized constants for projective-geometry.

This module defines the numeric tolerances and sampling pools used
throughout the library. Every tolerance derives from PRECISION_ZERO, so
changing that single value retunes coercion, equality and incidence tests
consistently.

Usage:
    from projective_geometry.core.constants import PRECISION_ZERO

    def is_small(x: float, eps: float = PRECISION_ZERO) -> bool:
        ...
"""

import sys

import torch


# =============================================================================
# Numeric Precision
# =============================================================================

# Any real value with absolute value not above this is treated as zero (~2.2e-12)
PRECISION_ZERO: float = 1e4 * sys.float_info.epsilon

# Any value with magnitude at or above this is treated as infinite
PRECISION_INFINITY: float = 1.0 / PRECISION_ZERO

# Homogeneous coordinates are rescaled once one of them reaches this magnitude
MAX_HOMOGENEOUS_VALUE: float = 10.0

# Rescaled coordinates get MAX_HOMOGENEOUS_VALUE / RESCALE_DIVISOR as largest magnitude
RESCALE_DIVISOR: float = 3.0

# Coordinates within PRECISION_ZERO of a multiple of 1 / SNAP_RESOLUTION are snapped
SNAP_RESOLUTION: int = 1000

# A linear complex is special (a line) when its self pairing is below this many epsilons
SPECIAL_TOLERANCE_FACTOR: float = 5.0

# Two lines are incident when their mutual pairing is below this many epsilons
INCIDENCE_TOLERANCE_FACTOR: float = 6.0

# Smallest accepted cross ratio factor of a central collineation
MIN_CENTRAL_FACTOR: float = 1000 * PRECISION_ZERO


# =============================================================================
# Tensor Defaults
# =============================================================================

# All coordinates and matrices are stored in double precision complex
COMPLEX_DTYPE: torch.dtype = torch.complex128


# =============================================================================
# Random Sampling
# =============================================================================

# Random coordinates are drawn from -RANDOM_VALUE_BOUND .. RANDOM_VALUE_BOUND
RANDOM_VALUE_BOUND: int = 10

# Number of additional zeros in the pool, favouring simple configurations
EXTRA_ZEROS: int = 10

# Coefficient bound when combining two points of a line into a random point
LINE_COMBINATION_BOUND: int = 100
