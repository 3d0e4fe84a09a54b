"""
Geometry module for projective-geometry.

Contains:
- Algebra: Cross and Plücker products, linear dependence, canonical
  transformation and cross ratio
- Affine: Export of homogeneous elements to affine coordinates
- Entities: Element1D, Point2D, Line2D, Point3D, Plane3D, LinearComplex, Line3D
- Transforms: Collineations and correlations in 1, 2 and 3 dimensions
"""

from .algebra import (
    dot_product,
    cross_product,
    plucker_product,
    linear_dependent_factors,
    imaginary_hvector,
    canonical_transformation,
    cross_ratio,
)

from .affine import (
    to_affine,
    normalize,
    canonical_direction,
    affine_string,
)

from .projective_line import Element1D
from .plane import Point2D, Line2D
from .space import Point3D, Plane3D
from .complexes import LinearComplex, Line3D, antisymmetric_matrix

from .transforms import (
    MappedSequence,
    ProjectiveTransformation,
    Collineation1D,
    Collineation2D,
    Correlation2D,
    Collineation3D,
    Correlation3D,
)

__all__ = [
    # Algebra
    "dot_product",
    "cross_product",
    "plucker_product",
    "linear_dependent_factors",
    "imaginary_hvector",
    "canonical_transformation",
    "cross_ratio",
    # Affine
    "to_affine",
    "normalize",
    "canonical_direction",
    "affine_string",
    # Entities
    "Element1D",
    "Point2D",
    "Line2D",
    "Point3D",
    "Plane3D",
    "LinearComplex",
    "Line3D",
    "antisymmetric_matrix",
    # Transforms
    "MappedSequence",
    "ProjectiveTransformation",
    "Collineation1D",
    "Collineation2D",
    "Correlation2D",
    "Collineation3D",
    "Correlation3D",
]
