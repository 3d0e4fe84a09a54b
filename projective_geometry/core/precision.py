"""
Precision handling for complex homogeneous coordinates.

Homogeneous coordinates are only defined up to a nonzero complex factor.
Without a canonical representative, zero tests and equality tests drift
under repeated transformations. The coercion engine therefore:
- makes homogeneous-real vectors (complex multiples of a real vector) real
- rescales vectors whose coordinates grow beyond MAX_HOMOGENEOUS_VALUE
- snaps near-rational components onto a 1 / SNAP_RESOLUTION grid

All helpers accept Python numbers as well as complex tensors.
"""

from __future__ import annotations
import math
from typing import Optional, Union

import numpy as np
import torch

from .constants import (
    COMPLEX_DTYPE,
    MAX_HOMOGENEOUS_VALUE,
    PRECISION_INFINITY,
    PRECISION_ZERO,
    RESCALE_DIVISOR,
    SNAP_RESOLUTION,
)
from .types import CoordinatesLike, MatrixLike, Scalar


# =============================================================================
# Conversion
# =============================================================================

def to_complex_tensor(values: CoordinatesLike) -> torch.Tensor:
    """
    Convert coordinates to a fresh 1-D complex128 tensor.

    Args:
        values: Sequence of numbers, numpy array or tensor

    Returns:
        Tensor of shape (N,) with dtype complex128
    """
    if isinstance(values, torch.Tensor):
        tensor = values.detach().to(COMPLEX_DTYPE).clone()
    elif isinstance(values, np.ndarray):
        tensor = torch.from_numpy(values.astype(np.complex128)).clone()
    else:
        tensor = torch.tensor([complex(v) for v in values], dtype=COMPLEX_DTYPE)
    return tensor.reshape(-1)


def to_complex_matrix(values: MatrixLike) -> torch.Tensor:
    """
    Convert a matrix to a fresh 2-D complex128 tensor.

    Raises:
        ValueError: If the input is not two-dimensional
    """
    if isinstance(values, torch.Tensor):
        matrix = values.detach().to(COMPLEX_DTYPE).clone()
    elif isinstance(values, np.ndarray):
        matrix = torch.from_numpy(values.astype(np.complex128)).clone()
    else:
        matrix = torch.tensor(
            [[complex(v) for v in row] for row in values], dtype=COMPLEX_DTYPE
        )
    if matrix.dim() != 2:
        raise ValueError(f"Expected a 2-D matrix, got {matrix.dim()} dimensions")
    return matrix


# =============================================================================
# Zero, Equality and Validity
# =============================================================================

def is_zero(value: Union[Scalar, torch.Tensor]) -> bool:
    """
    Check whether real and imaginary parts are zero within PRECISION_ZERO.

    For tensors every entry must be zero.
    """
    if isinstance(value, torch.Tensor):
        value = value.to(COMPLEX_DTYPE)
        return bool(
            (value.real.abs() <= PRECISION_ZERO).all()
            and (value.imag.abs() <= PRECISION_ZERO).all()
        )
    value = complex(value)
    return abs(value.real) <= PRECISION_ZERO and abs(value.imag) <= PRECISION_ZERO


def equals_within_precision(
    value: Union[Scalar, torch.Tensor],
    other: Union[Scalar, torch.Tensor]
) -> bool:
    """
    Compare real and imaginary parts separately: |a - b| < PRECISION_ZERO.

    Raises:
        ValueError: If two tensors of different length are compared
    """
    if isinstance(value, torch.Tensor) or isinstance(other, torch.Tensor):
        value = torch.as_tensor(value).to(COMPLEX_DTYPE)
        other = torch.as_tensor(other).to(COMPLEX_DTYPE)
        if value.shape != other.shape:
            raise ValueError(f"Cannot compare shapes {tuple(value.shape)} and {tuple(other.shape)}")
        difference = value - other
        return bool(
            (difference.real.abs() < PRECISION_ZERO).all()
            and (difference.imag.abs() < PRECISION_ZERO).all()
        )
    difference = complex(value) - complex(other)
    return abs(difference.real) < PRECISION_ZERO and abs(difference.imag) < PRECISION_ZERO


def is_valid(value: Union[Scalar, torch.Tensor]) -> bool:
    """Check for the absence of NaN and of magnitudes at or beyond PRECISION_INFINITY."""
    if isinstance(value, torch.Tensor):
        value = value.to(COMPLEX_DTYPE)
        if torch.isnan(value).any():
            return False
        return bool((value.abs() < PRECISION_INFINITY).all())
    value = complex(value)
    if math.isnan(value.real) or math.isnan(value.imag):
        return False
    return abs(value) < PRECISION_INFINITY


def coerce_zero(value: Union[Scalar, torch.Tensor]) -> Union[complex, torch.Tensor]:
    """
    Force real and imaginary parts below PRECISION_ZERO to exactly zero.

    Unlike a magnitude test this also cleans 1e-15 + 2i into 2i.
    """
    if isinstance(value, torch.Tensor):
        value = value.to(COMPLEX_DTYPE)
        real = torch.where(value.real.abs() <= PRECISION_ZERO, torch.zeros_like(value.real), value.real)
        imag = torch.where(value.imag.abs() <= PRECISION_ZERO, torch.zeros_like(value.imag), value.imag)
        return torch.complex(real, imag)
    value = complex(value)
    real = 0.0 if abs(value.real) <= PRECISION_ZERO else value.real
    imag = 0.0 if abs(value.imag) <= PRECISION_ZERO else value.imag
    return complex(real, imag)


# =============================================================================
# Homogeneous Coercion
# =============================================================================

def is_homogeneous_real(vector: torch.Tensor) -> bool:
    """
    Check whether the vector is a complex multiple of a real vector.

    Holds iff v[i] * conj(v[j]) equals v[j] * conj(v[i]) for every pair i, j.
    """
    vector = vector.to(COMPLEX_DTYPE)
    largest = vector.abs().max().item()
    if largest > 0:
        vector = vector / largest
    products = vector.unsqueeze(1) * vector.conj().unsqueeze(0)
    return equals_within_precision(products, products.transpose(0, 1))


def _snap(component: torch.Tensor) -> torch.Tensor:
    """Snap real values within PRECISION_ZERO of the 1/SNAP_RESOLUTION grid onto it."""
    ceiling = torch.ceil(component * SNAP_RESOLUTION) / SNAP_RESOLUTION
    floor = torch.floor(component * SNAP_RESOLUTION) / SNAP_RESOLUTION
    near_ceiling = (component - ceiling).abs() < PRECISION_ZERO
    near_floor = (component - floor).abs() < PRECISION_ZERO
    return torch.where(near_ceiling, ceiling, torch.where(near_floor, floor, component))


def coerce_homogeneous_coordinates(vector: torch.Tensor) -> torch.Tensor:
    """
    Produce the canonical representative of a homogeneous vector.

    Steps:
        1. If the vector is homogeneous-real, keep its real parts (or, when
           those are all negligible, move the imaginary parts to the real
           parts) and drop the rest.
        2. If any real or imaginary magnitude reaches MAX_HOMOGENEOUS_VALUE,
           scale by MAX_HOMOGENEOUS_VALUE / (RESCALE_DIVISOR * max).
        3. Snap every real and imaginary component to the nearest multiple
           of 1 / SNAP_RESOLUTION when it lies within PRECISION_ZERO of it.

    Args:
        vector: 1-D complex tensor

    Returns:
        New coerced tensor; the input is left untouched
    """
    vector = vector.to(COMPLEX_DTYPE).clone()

    if is_homogeneous_real(vector):
        if (vector.real.abs() > PRECISION_ZERO).any():
            part = vector.real
        else:
            part = vector.imag
        vector = torch.complex(part.clone(), torch.zeros_like(part))

    max_real = vector.real.abs().max().item()
    max_imaginary = vector.imag.abs().max().item()
    if max_real >= MAX_HOMOGENEOUS_VALUE or max_imaginary >= MAX_HOMOGENEOUS_VALUE:
        factor = MAX_HOMOGENEOUS_VALUE / (RESCALE_DIVISOR * max(max_real, max_imaginary))
        vector = vector * factor

    return torch.complex(_snap(vector.real), _snap(vector.imag))


def linear_dependant(vector: torch.Tensor, other: torch.Tensor) -> Optional[complex]:
    """
    Find the factor f with other = f * vector.

    Args:
        vector: 1-D complex tensor
        other: 1-D complex tensor of the same length

    Returns:
        The factor, or None if the vectors are not linearly dependent,
        differ in length, or either one is zero or invalid
    """
    if vector.shape != other.shape:
        return None
    if not is_valid(vector) or not is_valid(other) or is_zero(vector) or is_zero(other):
        return None
    if equals_within_precision(vector, other):
        return complex(1)

    factor = None
    for a, b in zip(vector.tolist(), other.tolist()):
        a_zero, b_zero = is_zero(a), is_zero(b)
        if a_zero and b_zero:
            continue
        if a_zero or b_zero:
            return None
        ratio = complex(b) / complex(a)
        if factor is None:
            factor = ratio
        elif not equals_within_precision(ratio, factor):
            return None
    return factor


# =============================================================================
# Formatting
# =============================================================================

def format_complex(value: Scalar) -> str:
    """Compact representation: '2', '-0.5', '1+2i', '-3i'."""
    value = complex(value)
    if value.imag == 0:
        return f"{value.real:g}"
    if value.real == 0:
        return f"{value.imag:g}i"
    return f"{value.real:g}{value.imag:+g}i"


def format_vector(values) -> str:
    """Representation of a coordinate sequence in the form (a, b, ..)."""
    return "(" + ", ".join(format_complex(v) for v in values) + ")"
