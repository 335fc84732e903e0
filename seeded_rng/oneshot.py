"""One-shot helpers: build a generator, perform one operation, discard it.

seeded_int/seeded_float/seeded_shuffle/seeded_pick use the fast LCG and
are NOT cryptographically secure. seeded_secure_* use SecureSeededRNG.
"""
from typing import Iterable, Sequence, TypeVar

from seeded_rng.logic.isaac import SecureSeededRNG
from seeded_rng.logic.lcg import SeededRNG


T = TypeVar("T")


def create_rng(seed: int | None = None) -> SeededRNG:
    """Create a fast SeededRNG; None draws a random seed."""
    return SeededRNG(seed)


def create_secure_rng(seed: int | None = None) -> SecureSeededRNG:
    """Create a SecureSeededRNG; None draws a seed from the OS entropy pool."""
    return SecureSeededRNG(seed)


def seeded_int(seed: int, min_value: int, max_value: int) -> int:
    return SeededRNG(seed).next_int(min_value, max_value)


def seeded_float(seed: int, min_value: float, max_value: float) -> float:
    return SeededRNG(seed).next_float(min_value, max_value)


def seeded_shuffle(seed: int, sequence: Iterable[T]) -> list[T]:
    """Shuffled copy of sequence, deterministic for a given seed."""
    return SeededRNG(seed).shuffle(sequence)


def seeded_pick(seed: int, sequence: Sequence[T]) -> T | None:
    return SeededRNG(seed).pick(sequence)


def seeded_secure_int(seed: int, min_value: int, max_value: int) -> int:
    return SecureSeededRNG(seed).next_int(min_value, max_value)


def seeded_secure_hex(seed: int, length: int) -> str:
    """2 * length hex characters from a fresh SecureSeededRNG(seed)."""
    return SecureSeededRNG(seed).next_hex(length)
