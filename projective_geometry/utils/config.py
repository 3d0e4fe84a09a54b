"""
Configuration management for projective-geometry.

A Config seeds the random constructions (random incident elements, central
collineations, sampled lines of a complex) and can be stored as JSON next to
the figures it reproduces.
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
from pathlib import Path

import numpy as np


@dataclass
class Config:
    """
    Configuration for random constructions.

    Passed as ``rng`` to any sampling operation, a Config hands out one
    generator that is created from ``seed`` on first use and advanced by every
    later draw. Two configs with the same seed therefore produce the same
    sequence of constructions.

    Attributes:
        seed: Seed for the generator; None draws fresh entropy
        extra: Additional user-defined settings
    """

    seed: Optional[int] = None

    # Additional fields
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._generator = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary; unknown keys are kept in extra."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        known_kwargs = {k: v for k, v in config_dict.items() if k in known_fields}
        extra_kwargs = {k: v for k, v in config_dict.items() if k not in known_fields}

        config = cls(**known_kwargs)
        config.extra = {**config.extra, **extra_kwargs}
        return config

    def update(self, **kwargs) -> 'Config':
        """Return a new config with updated values and its own generator."""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return Config.from_dict(config_dict)

    def make_rng(self) -> np.random.Generator:
        """Fresh generator seeded with this config's seed."""
        return np.random.default_rng(self.seed)

    @property
    def generator(self) -> np.random.Generator:
        """Generator shared by every construction drawing from this config."""
        if self._generator is None:
            self._generator = self.make_rng()
        return self._generator


def load_config(filepath: str) -> Config:
    """
    Read a seed configuration written by save_config.

    Keys other than ``seed`` and ``extra`` end up in ``extra``.
    """
    with open(Path(filepath), 'r') as f:
        return Config.from_dict(json.load(f))


def save_config(config: Config, filepath: str) -> None:
    """
    Write a configuration as JSON, creating missing parent directories.

    Only the seed and the extra settings are stored; the state of a generator
    already in use is not.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
