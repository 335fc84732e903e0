"""Generator contract and the derived operations shared by every generator."""
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Iterable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from seeded_rng.errors import InvalidCheckpointError
from seeded_rng.logic.models import RNGStats
from seeded_rng.telemetry import GeneratorForkedEvent, telemetry_service
from seeded_rng.validators import (
    validate_checkpoint_header,
    validate_length,
    validate_range,
    validate_weights,
)


T = TypeVar("T")
CheckpointT = TypeVar("CheckpointT", bound=BaseModel)

HEX_DIGITS = "0123456789abcdef"


class RNGBase(ABC):
    """
    Deterministic generator interface.

    Subclasses supply the primitive next() plus seed management; every
    other operation is defined here purely in terms of next(), so the
    derived algorithms are identical regardless of the backing generator.

    Instances are single-owner and not thread-safe.
    """

    KIND: str = ""
    # Inclusive upper bound of the seed domain, used by fork()
    SEED_MAX: int = 0

    _initial_seed: int
    _seed: int
    _iterations: int

    # === primitive surface ===

    @abstractmethod
    def next(self) -> float:
        """Return the next float in [0, 1) and advance the state."""
        pass

    @abstractmethod
    def set_seed(self, seed: int) -> None:
        """Move the current state to seed without touching the initial seed."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Return to the post-construction state."""
        pass

    @abstractmethod
    def checkpoint(self) -> BaseModel:
        """Snapshot the full resumable state."""
        pass

    @abstractmethod
    def restore(self, checkpoint: BaseModel | Mapping[str, Any]) -> None:
        """Put the generator back into a checkpointed state."""
        pass

    def get_initial_seed(self) -> int:
        return self._initial_seed

    def get_current_seed(self) -> int:
        return self._seed

    def get_stats(self) -> RNGStats:
        """Snapshot of seed state; computed on demand, never cached."""
        return RNGStats(
            initial_seed=self._initial_seed,
            current_seed=self._seed,
            iterations=self._iterations,
        )

    # === derived operations ===

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both inclusive."""
        validate_range(min_value, max_value)
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        validate_range(min_value, max_value)
        return self.next() * (max_value - min_value) + min_value

    def chance(self, probability: float) -> bool:
        """True with the given probability; p <= 0 never, p >= 1 always."""
        return self.next() < probability

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.chance(probability)

    def next_sign(self) -> int:
        """Return 1 or -1 with equal probability."""
        return 1 if self.chance(0.5) else -1

    def pick(self, sequence: Sequence[T]) -> T | None:
        """Return a random element, or None for an empty sequence."""
        if len(sequence) == 0:
            return None
        return sequence[self.next_int(0, len(sequence) - 1)]

    def shuffle(self, sequence: Iterable[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; the input is left untouched."""
        result = list(sequence)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def weighted_pick(self, items: Iterable[Any]) -> Any | None:
        """
        Pick an item with probability proportional to its weight.

        items holds WeightedItem instances or (item, weight) pairs.
        Returns None for no items. If float rounding leaves the walk
        unfinished the last item is returned.
        """
        entries = validate_weights(items)
        if not entries:
            return None

        total_weight = sum(entry.weight for entry in entries)
        remaining = self.next() * total_weight
        for entry in entries:
            remaining -= entry.weight
            if remaining <= 0:
                return entry.item

        return entries[-1].item

    def next_hex(self, length: int) -> str:
        """
        Return length hex characters, one next_int(0, 15) per character.

        Not for security use.
        """
        validate_length(length)
        return "".join(HEX_DIGITS[self.next_int(0, 15)] for _ in range(length))

    def next_uuid(self) -> str:
        """Return a UUID-shaped hex string. Not an RFC 4122 UUID."""
        return "-".join(self.next_hex(n) for n in (8, 4, 4, 4, 12))

    def fork(self):
        """
        Create an independent generator of the same class.

        The child's seed is one next_int() draw from this generator, so
        the parent advances exactly as for any other draw.
        """
        parent_initial_seed = self._initial_seed
        child_seed = self.next_int(0, self.SEED_MAX)
        telemetry_service.emit_generator_forked(
            GeneratorForkedEvent(
                kind=self.KIND,
                parent_initial_seed=parent_initial_seed,
                parent_iterations=self._iterations,
                child_seed=child_seed,
            )
        )
        return type(self)(child_seed)

    # stdlib-style aliases

    def random(self) -> float:
        return self.next()

    def randint(self, a: int, b: int) -> int:
        return self.next_int(a, b)

    # === checkpoint helpers ===

    def _load_checkpoint(
        self,
        checkpoint: BaseModel | Mapping[str, Any],
        model: type[CheckpointT],
    ) -> CheckpointT:
        """
        Coerce a model or mapping into a validated checkpoint of this kind.

        Model instances are dumped and validated again, since fields can be
        reassigned after construction without validation.
        """
        if isinstance(checkpoint, model):
            checkpoint = checkpoint.model_dump()
        elif isinstance(checkpoint, BaseModel):
            raise InvalidCheckpointError(
                f"Cannot restore {type(checkpoint).__name__} into {type(self).__name__}."
            )

        if isinstance(checkpoint, Mapping):
            kind = checkpoint.get("kind", self.KIND)
            if kind != self.KIND:
                raise InvalidCheckpointError(
                    f"Cannot restore a {kind!r} checkpoint into a {self.KIND!r} generator."
                )
        try:
            loaded = model.model_validate(checkpoint)
        except ValidationError as e:
            raise InvalidCheckpointError(
                f"Malformed checkpoint ({e.error_count()} validation errors)."
            ) from e

        validate_checkpoint_header(loaded.kind, self.KIND, loaded.version)
        return loaded
