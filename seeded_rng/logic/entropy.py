"""
Ambient seed sources for unseeded construction.

Generators never read entropy after construction; these sources only
pick the initial seed. Pass an explicit ``entropy=`` to a generator to
substitute a fixed source in tests.
"""
import logging
import random
import secrets
from typing import Iterable, Protocol

from seeded_rng.config import settings
from seeded_rng.errors import EntropyUnavailableError
from seeded_rng.telemetry import EntropyFallbackEvent, telemetry_service


logger = logging.getLogger(__name__)


class EntropySource(Protocol):
    """Anything that can draw a uniform integer in [0, n)."""

    name: str

    def randbelow(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        ...


class StrongEntropySource:
    """OS entropy pool via the secrets module."""

    name = "secrets"

    def randbelow(self, n: int) -> int:
        try:
            return secrets.randbelow(n)
        except (NotImplementedError, OSError) as e:
            raise EntropyUnavailableError(
                f"OS entropy source unavailable: {e}"
            ) from e


class WeakEntropySource:
    """Non-cryptographic fallback backed by random.Random."""

    name = "random"

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)


class FixedEntropySource:
    """
    Replays a fixed list of values, cycling when exhausted.

    Values are reduced modulo n so any integers can be supplied.
    """

    name = "fixed"

    def __init__(self, values: Iterable[int]):
        self._values = list(values)
        if not self._values:
            raise ValueError("FixedEntropySource needs at least one value")
        self._index = 0

    def randbelow(self, n: int) -> int:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value % n


strong_entropy: EntropySource = StrongEntropySource()
weak_entropy: EntropySource = WeakEntropySource()


def draw_seed(
    bound: int,
    source: EntropySource | None = None,
    *,
    strong: bool = False,
    kind: str = "fast",
) -> tuple[int, str]:
    """
    Draw an initial seed in [0, bound).

    Returns (seed, source_name). An explicit source is used as-is. With
    strong=True the OS pool is tried first; if it is unreachable the weak
    source is used with a warning, unless settings.require_strong_entropy
    is set, in which case EntropyUnavailableError propagates.
    """
    if source is not None:
        return source.randbelow(bound), source.name
    if not strong:
        return weak_entropy.randbelow(bound), weak_entropy.name

    try:
        return strong_entropy.randbelow(bound), strong_entropy.name
    except EntropyUnavailableError as e:
        if settings.require_strong_entropy:
            raise
        logger.warning(
            "Strong entropy unavailable for %s generator, falling back to %s: %s",
            kind,
            weak_entropy.name,
            e.message,
        )
        telemetry_service.emit_entropy_fallback(
            EntropyFallbackEvent(kind=kind, reason=e.message)
        )
        return weak_entropy.randbelow(bound), weak_entropy.name
