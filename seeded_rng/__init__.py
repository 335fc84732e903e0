"""Seeded random number generators.

Two generators share one interface (RNGBase):

- SeededRNG: fast LCG. NOT cryptographically secure; for games,
  simulations and tests only.
- SecureSeededRNG: ISAAC-style block generator with hex/bytes/base64/UUID
  helpers. Deterministic when seeded.
"""

from .errors import (
    EntropyUnavailableError,
    ErrorCode,
    InvalidCheckpointError,
    InvalidLengthError,
    InvalidRangeError,
    InvalidWeightsError,
    RNGError,
)
from .logic.entropy import FixedEntropySource, StrongEntropySource, WeakEntropySource
from .logic.isaac import SecureSeededRNG
from .logic.lcg import SeededRNG
from .logic.models import FastCheckpoint, RNGStats, SecureCheckpoint, WeightedItem
from .logic.rng import RNGBase
from .oneshot import (
    create_rng,
    create_secure_rng,
    seeded_float,
    seeded_int,
    seeded_pick,
    seeded_secure_hex,
    seeded_secure_int,
    seeded_shuffle,
)

__all__ = [
    "EntropyUnavailableError",
    "ErrorCode",
    "FastCheckpoint",
    "FixedEntropySource",
    "InvalidCheckpointError",
    "InvalidLengthError",
    "InvalidRangeError",
    "InvalidWeightsError",
    "RNGBase",
    "RNGError",
    "RNGStats",
    "SecureCheckpoint",
    "SecureSeededRNG",
    "SeededRNG",
    "StrongEntropySource",
    "WeakEntropySource",
    "WeightedItem",
    "create_rng",
    "create_secure_rng",
    "seeded_float",
    "seeded_int",
    "seeded_pick",
    "seeded_secure_hex",
    "seeded_secure_int",
    "seeded_shuffle",
]
