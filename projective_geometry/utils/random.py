"""
Random sources and sampling pools for synthetic constructions.

Every sampling operation in the library takes an optional ``rng`` keyword
which is resolved here. Passing nothing gives a fresh, independently seeded
generator per call; passing a seed, a Generator or a Config makes the
construction reproducible.

Example:
    >>> rng = resolve_rng(42)
    >>> pick(NUMBERS_NOT_INCLUDING_ZERO, rng)
"""

from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np
import torch

from ..core.constants import COMPLEX_DTYPE, EXTRA_ZEROS, RANDOM_VALUE_BOUND


T = TypeVar("T")

RandomSource = Union[None, int, np.random.Generator, Any]


# =============================================================================
# Pools
# =============================================================================

# Small integers with additional zeros, favouring axis-aligned coordinates
NUMBERS_INCLUDING_MANY_ZEROS: Tuple[int, ...] = (
    tuple(range(-RANDOM_VALUE_BOUND, RANDOM_VALUE_BOUND + 1)) + (0,) * EXTRA_ZEROS
)

# Small nonzero integers
NUMBERS_NOT_INCLUDING_ZERO: Tuple[int, ...] = (
    tuple(range(1, RANDOM_VALUE_BOUND + 1)) + tuple(range(-RANDOM_VALUE_BOUND, 0))
)


# =============================================================================
# Generator Resolution
# =============================================================================

def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """
    Resolve a random source into a numpy Generator.

    Args:
        rng: None for a fresh unseeded generator, an integer seed,
             an existing Generator, or a Config whose shared generator
             is advanced by each call

    Returns:
        numpy Generator
    """
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(int(rng))
    if hasattr(rng, "generator"):
        return rng.generator
    raise TypeError(f"Cannot use {type(rng).__name__} as random source")


def pick(pool: Sequence[T], rng: np.random.Generator) -> T:
    """Pick one element of a pool uniformly."""
    return pool[int(rng.integers(len(pool)))]


def pick_integer(low: int, high: int, rng: np.random.Generator) -> int:
    """Pick an integer in [low, high)."""
    return int(rng.integers(low, high))


def pick_sign(rng: np.random.Generator) -> int:
    return 1 if rng.random() >= 0.5 else -1


def shuffled(items: Sequence[T], rng: np.random.Generator) -> List[T]:
    """Return a shuffled copy of the items."""
    order = rng.permutation(len(items))
    return [items[int(i)] for i in order]


def pick_value(
    pool: Sequence[int],
    real: bool,
    rng: np.random.Generator,
    imaginary_pool: Optional[Sequence[int]] = None
) -> complex:
    """
    Pick a random coordinate value.

    Args:
        pool: Pool for the real part
        real: If False, an imaginary part is drawn as well
        rng: Random generator
        imaginary_pool: Pool for the imaginary part (defaults to pool)
    """
    if real:
        return complex(pick(pool, rng), 0)
    return complex(pick(pool, rng), pick(imaginary_pool or pool, rng))


def unit_step(real: bool, rng: np.random.Generator) -> complex:
    """Perturbation added to a coordinate when a random candidate must change."""
    if real:
        return complex(1, 0)
    return complex(1, pick_sign(rng))


# =============================================================================
# Random Homogeneous Vectors
# =============================================================================

def pick_random_values(count: int, real: bool = True, rng: RandomSource = None) -> List[complex]:
    """
    Pick count random small-integer coordinates, never all zero.

    Args:
        count: Number of coordinates
        real: Restrict to real coordinates
        rng: Random source

    Returns:
        List of complex coordinates
    """
    rng = resolve_rng(rng)
    values = [pick_value(NUMBERS_INCLUDING_MANY_ZEROS, real, rng) for _ in range(count)]
    if all(v == 0 for v in values):
        values[pick_integer(0, count, rng)] += unit_step(real, rng)
    return values


def pick_random_hvector(count: int, real: bool = True, rng: RandomSource = None) -> torch.Tensor:
    """Random nonzero coordinate tensor of the given length."""
    return torch.tensor(pick_random_values(count, real, rng), dtype=COMPLEX_DTYPE)
