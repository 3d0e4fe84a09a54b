"""
Affine helpers for exporting homogeneous elements.

Points with a nonzero leading coordinate have affine coordinates
x[1:] / x[0]. Points at infinity have none; they are exported as a
normalized direction with a canonical orientation so that all
representatives of one direction give the same vector.
"""

from __future__ import annotations
from typing import Optional

import torch

from ..core.precision import coerce_zero, format_vector, is_zero


def to_affine(vector: torch.Tensor) -> Optional[torch.Tensor]:
    """
    Affine coordinates of a homogeneous point vector.

    Returns:
        Tensor of shape (N,), or None if the point is at infinity
    """
    if is_zero(vector[0].item()):
        return None
    return coerce_zero(vector[1:] / vector[0])


def normalize(vector: torch.Tensor) -> torch.Tensor:
    norm = torch.linalg.vector_norm(vector)
    if is_zero(norm.item()):
        return vector.clone()
    return vector / norm


def canonical_direction(vector: torch.Tensor) -> torch.Tensor:
    """
    Normalized direction whose first non-negligible real component is positive.

    Args:
        vector: Direction of shape (N,)

    Returns:
        Unit direction with canonical sign
    """
    direction = normalize(vector)
    for component in direction.tolist():
        real = complex(component).real
        if not is_zero(real):
            if real < 0:
                direction = -direction
            break
    return coerce_zero(direction)


def affine_string(vector: Optional[torch.Tensor]) -> str:
    if vector is None:
        return "infinity"
    return format_vector(vector.tolist())
