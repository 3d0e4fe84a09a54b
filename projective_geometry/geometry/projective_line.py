"""
Elements of the projective line.

An Element1D (x0, x1) is a point of the complex projective line with
affine coordinate x1 / x0; (0, 1) is the point at infinity.
"""

from __future__ import annotations
import math
from typing import Optional

from ..core.base import HVector
from ..core.precision import format_complex, is_zero
from ..core.types import Scalar


class Element1D(HVector):
    """Point of the projective line with coordinates (x0, x1)."""

    coordinate_count = 2

    @classmethod
    def from_affine(cls, x: Scalar, name: Optional[str] = None) -> Element1D:
        """Element with affine coordinate x, i.e. (1, x)."""
        return cls(1, x, name=name)

    def is_at_infinity(self) -> bool:
        return is_zero(self[0])

    def to_affine(self) -> Optional[complex]:
        """Affine coordinate x1 / x0, or None at infinity."""
        if self.is_at_infinity():
            return None
        return self[1] / self[0]

    def distance_origin(self) -> float:
        if self.is_at_infinity():
            return math.inf
        return abs(self[1] / self[0])

    def to_affine_string(self) -> str:
        if self.is_at_infinity():
            return "infinity"
        return f"({format_complex(self.to_affine())})"


Element1D.ORIGIN = Element1D(1, 0)
Element1D.INFINITY = Element1D(0, 1)
Element1D.UNITY = Element1D(1, 1)
