"""
projective-geometry: Synthetic projective geometry over the complex numbers

A PyTorch-based library for constructing configurations of points, lines,
planes and linear complexes in the projective line, plane and space, with
exact-looking homogeneous coordinates and projective transformations.

Key Features:
- Homogeneous vectors with precision coercion and equality up to scale
- Meet, join and incidence for 2D and 3D elements
- Plücker coordinates, linear complexes and null polarities
- Canonical transformation and cross ratio
- Collineations and correlations from correspondences
- Central collineations and sphere polarities
- Injected random sources for reproducible synthetic constructions

Example:
    >>> from projective_geometry import Point2D, Line2D
    >>> line = Point2D.ORIGIN.join(Point2D(1, 3, 2.5))
    >>> line.meet(Line2D.INFINITY)
    Point2D(0, 3, 2.5)
"""

__version__ = "0.1.0"
__author__ = "projective-geometry Contributors"

from . import core
from . import geometry
from . import utils

from .core import (
    CoordinateType,
    HVector,
    GeometryError,
    AlgorithmError,
    NotCollinearError,
    PRECISION_ZERO,
)
from .geometry import (
    Element1D,
    Point2D,
    Line2D,
    Point3D,
    Plane3D,
    LinearComplex,
    Line3D,
    Collineation1D,
    Collineation2D,
    Correlation2D,
    Collineation3D,
    Correlation3D,
    canonical_transformation,
    cross_ratio,
)
from .utils import Config, Set, ParameterList

__all__ = [
    # Subpackages
    "core",
    "geometry",
    "utils",
    # Core
    "CoordinateType",
    "HVector",
    "GeometryError",
    "AlgorithmError",
    "NotCollinearError",
    "PRECISION_ZERO",
    # Entities
    "Element1D",
    "Point2D",
    "Line2D",
    "Point3D",
    "Plane3D",
    "LinearComplex",
    "Line3D",
    # Transformations
    "Collineation1D",
    "Collineation2D",
    "Correlation2D",
    "Collineation3D",
    "Correlation3D",
    # Algorithms
    "canonical_transformation",
    "cross_ratio",
    # Utilities
    "Config",
    "Set",
    "ParameterList",
]
