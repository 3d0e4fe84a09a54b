"""
Pytest configuration and fixtures for projective-geometry tests.
"""

import numpy as np
import pytest
import torch

from projective_geometry import Config, Element1D, Point2D


@pytest.fixture
def rng():
    """Seeded generator for reproducible random constructions."""
    return np.random.default_rng(42)


@pytest.fixture
def config():
    """Config with a fixed seed."""
    return Config(seed=7)


@pytest.fixture
def identity3():
    """3x3 complex identity matrix."""
    return torch.eye(3, dtype=torch.complex128)


@pytest.fixture
def harmonic_elements():
    """Four elements of the projective line with cross ratio -1."""
    return [Element1D(1, 0), Element1D(0, 1), Element1D(1, 1), Element1D(1, -1)]


@pytest.fixture
def frame2d():
    """Canonical frame of the projective plane: unity followed by the basis points."""
    return [Point2D.UNITY, Point2D.ORIGIN, Point2D.INFINITY_X, Point2D.INFINITY_Y]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
