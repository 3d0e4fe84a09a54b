"""
Utility modules for projective-geometry.

Contains:
- Config: Seeded generator for random constructions, JSON load/save
- Random: Injected random sources and sampling pools
- Containers: Set and ParameterList
"""

from .config import (
    Config,
    load_config,
    save_config,
)

from .random import (
    NUMBERS_INCLUDING_MANY_ZEROS,
    NUMBERS_NOT_INCLUDING_ZERO,
    resolve_rng,
    pick,
    pick_integer,
    pick_sign,
    shuffled,
    pick_random_values,
    pick_random_hvector,
)

from .containers import (
    Set,
    ParameterList,
)

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    # Random
    "NUMBERS_INCLUDING_MANY_ZEROS",
    "NUMBERS_NOT_INCLUDING_ZERO",
    "resolve_rng",
    "pick",
    "pick_integer",
    "pick_sign",
    "shuffled",
    "pick_random_values",
    "pick_random_hvector",
    # Containers
    "Set",
    "ParameterList",
]
