"""
Tests for the HVector base class: construction, equality up to scale,
matrix application and random incident vectors.
"""

import numpy as np
import pytest
import torch

from projective_geometry import Element1D, HVector, Line2D, Point2D, Point3D
from projective_geometry.geometry.algebra import dot_product


# =============================================================================
# Construction
# =============================================================================

class TestHVectorCreation:
    """Tests for constructing homogeneous vectors."""

    def test_from_scalars(self):
        v = HVector(1, 2, 3)
        assert len(v) == 3
        assert v.to_list() == [1, 2, 3]

    def test_from_sequence_and_tensor(self):
        assert HVector([1, 2j]) == HVector(torch.tensor([1, 2j]))
        assert HVector(np.array([1.0, 2.0])) == HVector(1, 2)

    def test_from_hvector_copies(self):
        original = Point2D(1, 2, 3)
        copy = Point2D(original)
        assert copy == original
        assert copy is not original

    def test_requires_two_coordinates(self):
        with pytest.raises(ValueError):
            HVector(1)

    def test_subclass_coordinate_count(self):
        with pytest.raises(ValueError, match="Expected 3 coordinates"):
            Point2D(1, 2)
        with pytest.raises(ValueError):
            Point3D(1, 2, 3)

    def test_rejects_zero_vector(self):
        with pytest.raises(ValueError):
            HVector(0, 0, 0)

    def test_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            HVector(float("nan"), 1)
        with pytest.raises(ValueError):
            HVector(float("inf"), 1)

    def test_stores_coerced_representative(self):
        assert HVector(2j, 4j, 6j).to_list() == [2, 4, 6]
        assert HVector(1 + 1j, 2 + 2j).to_list() == [1, 2]

    def test_name(self):
        assert Point2D(1, 0, 0, name="O").name == "O"

    def test_indexing_returns_complex(self):
        v = HVector(1, 2j)
        assert isinstance(v[1], complex)
        assert v[1] == 2j

    def test_to_tensor_is_a_copy(self):
        v = HVector(1, 2)
        t = v.to_tensor()
        t[0] = 7
        assert v[0] == 1


# =============================================================================
# Equality
# =============================================================================

class TestHVectorEquality:
    """Equality is equality up to a nonzero complex factor."""

    def test_scalar_multiples_are_equal(self):
        assert Point2D(2j, 4j, 6j) == Point2D(1, 2, 3)
        assert HVector(1, 1j) == HVector(1j, -1)

    def test_different_vectors(self):
        assert Point2D(1, 2, 3) != Point2D(1, 2, 4)

    def test_non_hvector_is_not_equal(self):
        assert Point2D(1, 0, 0) != 5
        assert not (Point2D(1, 0, 0) == "point")

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Point2D(1, 0, 0))


# =============================================================================
# Properties and Algebra
# =============================================================================

class TestHVectorProperties:

    def test_is_real(self):
        assert HVector(1j, 2j).is_real()
        assert not HVector(1, 1j).is_real()

    def test_conjugate(self):
        v = Point2D(1, 1j, 2)
        assert v.conjugate == Point2D(1, -1j, 2)
        assert isinstance(v.conjugate, Point2D)
        assert v.conjugate is v.conjugate

    def test_repr(self):
        assert repr(Point2D(1, 0, 0)) == "Point2D(1, 0, 0)"
        assert repr(HVector(1, 2j)) == "HVector(1, 2i)"

    def test_multiply_identity(self, identity3):
        assert Point2D(1, 2, 3).multiply(identity3).tolist() == [1, 2, 3]

    def test_multiply_to_zero_gives_none(self):
        projection = torch.zeros(3, 3, dtype=torch.complex128)
        projection[0, 0] = 1
        assert Point2D(0, 1, 1).multiply(projection) is None

    def test_multiply_wrong_shape(self):
        with pytest.raises(ValueError):
            Point2D(1, 2, 3).multiply(torch.eye(4))


# =============================================================================
# Random Incident Vectors
# =============================================================================

class TestRandomIncident:
    """Tests for get_random_incident."""

    def test_two_coordinates_is_unique(self):
        assert Element1D(1, 2).get_random_incident() == HVector(-2, 1)

    @pytest.mark.parametrize("coordinates", [
        (1, 2, 3),
        (0, 0, 5),
        (0, 1, 1j),
        (2, 0, -1, 4),
        (0, 0, 0, 1),
    ])
    def test_incident(self, coordinates, rng):
        v = HVector(*coordinates)
        for _ in range(10):
            w = v.get_random_incident(rng=rng)
            assert abs(dot_product(v, w)) < 1e-9
            assert not w.is_zero()

    def test_real_flag(self, rng):
        v = HVector(1, 2, 3, 4)
        for _ in range(10):
            assert v.get_random_incident(real=True, rng=rng).is_real()

    def test_complex_sampling(self, rng):
        v = HVector(1, 2, 3)
        for _ in range(10):
            w = v.get_random_incident(real=False, rng=rng)
            assert abs(dot_product(v, w)) < 1e-9

    def test_exclude(self, rng):
        line = Line2D.X_AXIS
        excluded = [Point2D.ORIGIN, Point2D.INFINITY_X, Point2D(1, 1, 0), Point2D(1, -1, 0)]
        for _ in range(20):
            point = line.get_point(exclude=excluded, rng=rng)
            assert point.is_incident(line)
            assert all(point != e for e in excluded)

    def test_seed_is_reproducible(self):
        v = HVector(3, -1, 2, 5)
        assert v.get_random_incident(rng=11) == v.get_random_incident(rng=11)
