"""Fast linear-congruential generator."""
from collections.abc import Mapping
from typing import Any

from seeded_rng.logic.entropy import EntropySource, draw_seed
from seeded_rng.logic.models import FastCheckpoint
from seeded_rng.logic.rng import RNGBase
from seeded_rng.telemetry import GeneratorSeededEvent, telemetry_service


class SeededRNG(RNGBase):
    """
    Fast seeded RNG: seed' = (seed * A + C) mod M.

    WARNING: NOT cryptographically secure. The modulus is below 2**18,
    so the sequence is short and easy to predict. Use it for games,
    simulations and tests; never for passwords, keys, tokens or nonces.
    Use SecureSeededRNG for those.

    Deterministic: the same seed always yields the same float sequence.
    """

    KIND = "fast"
    SEED_MAX = 2**31 - 1

    # LCG parameters (Numerical Recipes)
    A = 9301
    C = 49297
    M = 233280

    def __init__(self, seed: int | None = None, *, entropy: EntropySource | None = None):
        if seed is None:
            seed, source_name = draw_seed(self.SEED_MAX, entropy, kind=self.KIND)
            telemetry_service.emit_generator_seeded(
                GeneratorSeededEvent(
                    kind=self.KIND,
                    initial_seed=seed,
                    entropy_source=source_name,
                )
            )
        self._initial_seed = seed
        self._seed = seed
        self._iterations = 0

    def next(self) -> float:
        self._seed = (self._seed * self.A + self.C) % self.M
        self._iterations += 1
        return self._seed / self.M

    def set_seed(self, seed: int) -> None:
        """Jump to a previously observed current seed; reset() still rewinds to the origin."""
        self._seed = seed

    def reset(self) -> None:
        self._seed = self._initial_seed
        self._iterations = 0

    def checkpoint(self) -> FastCheckpoint:
        return FastCheckpoint(
            initial_seed=self._initial_seed,
            current_seed=self._seed,
            iterations=self._iterations,
        )

    def restore(self, checkpoint: FastCheckpoint | Mapping[str, Any]) -> None:
        loaded = self._load_checkpoint(checkpoint, FastCheckpoint)
        self._initial_seed = loaded.initial_seed
        self._seed = loaded.current_seed
        self._iterations = loaded.iterations
