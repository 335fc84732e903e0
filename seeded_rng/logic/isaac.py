"""ISAAC-style deterministic block generator."""
import base64
import uuid
from collections.abc import Mapping
from typing import Any

from seeded_rng.logic.entropy import EntropySource, draw_seed
from seeded_rng.logic.models import BUFFER_SIZE, MASK32, SecureCheckpoint
from seeded_rng.logic.rng import RNGBase
from seeded_rng.telemetry import GeneratorSeededEvent, telemetry_service
from seeded_rng.validators import validate_length


GOLDEN_RATIO = 0x9E3779B9
HALF_BUFFER = BUFFER_SIZE // 2
WORD_RANGE = 2**32
SIGN_BIT = 0x80000000


def _expand_word(mix: int) -> int:
    """
    One seed-expansion step: (mix ^ (mix >> 16)) * GOLDEN_RATIO, wrapped to 32 bits.

    The xor is taken as a signed 32-bit value and multiplied as a double,
    so products past 2**53 lose their low bits before the wrap. Published
    seed-to-stream snapshots depend on that rounding.
    """
    mixed = mix ^ (mix >> 16)
    if mixed & SIGN_BIT:
        mixed -= WORD_RANGE
    return int(float(mixed) * float(GOLDEN_RATIO)) & MASK32


class SecureSeededRNG(RNGBase):
    """
    Seeded RNG built on the ISAAC cipher's indirection/accumulate scheme.

    Words are produced in batches of 256. Seeding expands the seed into
    the buffer and runs one warm-up round, so the first batch handed out
    is already mixed. When a batch is used up the next round runs inside
    the draw.

    Deterministic like SeededRNG: the same seed gives the same stream,
    including next_hex/next_bytes/next_base64/next_uuid, which never
    read ambient entropy. This is not an audited CSPRNG; anyone who
    learns the seed can reproduce every output.

    Unseeded construction takes its seed from the OS entropy pool, see
    seeded_rng.logic.entropy.draw_seed for the fallback policy.
    """

    KIND = "secure"
    SEED_MAX = 2**32 - 1

    def __init__(self, seed: int | None = None, *, entropy: EntropySource | None = None):
        if seed is None:
            seed, source_name = draw_seed(WORD_RANGE, entropy, strong=True, kind=self.KIND)
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
        self._buffer: list[int] = [0] * BUFFER_SIZE
        self._cursor = BUFFER_SIZE
        self._acc_a = 0
        self._acc_b = 0
        self._acc_c = 0
        self._isaac_seed(seed)

    def _isaac_seed(self, seed: int) -> None:
        """Rebuild buffer and accumulators from seed, then run one warm-up round."""
        mix = seed & MASK32
        for i in range(BUFFER_SIZE):
            self._buffer[i] = mix = _expand_word(mix)

        self._acc_a = seed & MASK32
        self._acc_b = (seed ^ GOLDEN_RATIO) & MASK32
        self._acc_c = (seed ^ GOLDEN_RATIO) & MASK32

        self._cursor = BUFFER_SIZE
        self._isaac()

    def _isaac(self) -> None:
        """One mix round over the whole buffer; all arithmetic mod 2**32."""
        buffer = self._buffer
        a = self._acc_a
        self._acc_c = (self._acc_c + 1) & MASK32
        b = (self._acc_b + self._acc_c) & MASK32

        for i in range(BUFFER_SIZE):
            step = i & 3
            if step == 0:
                a ^= (a << 13) & MASK32
            elif step == 1:
                a ^= a >> 6
            elif step == 2:
                a ^= (a << 2) & MASK32
            else:
                a ^= a >> 16

            y = (buffer[(i + HALF_BUFFER) & 0xFF] + a + b) & MASK32
            buffer[i] = y
            b = (buffer[(y >> 2) & 0xFF] + a + b) & MASK32

        self._acc_a = a
        self._acc_b = b

    def _rand(self) -> int:
        """Next unsigned 32-bit word, most recently filled slot first."""
        if self._cursor == 0:
            self._isaac()
            self._cursor = BUFFER_SIZE

        self._cursor -= 1
        self._iterations += 1
        return self._buffer[self._cursor]

    def _rand_bytes(self, length: int) -> bytes:
        return bytes(self._rand() & 0xFF for _ in range(length))

    def next(self) -> float:
        return self._rand() / WORD_RANGE

    def set_seed(self, seed: int) -> None:
        """Re-seed in full; the iteration counter keeps running."""
        self._seed = seed
        self._isaac_seed(seed)

    def reset(self) -> None:
        self._seed = self._initial_seed
        self._iterations = 0
        self._isaac_seed(self._initial_seed)

    # === secure output helpers ===

    def next_hex(self, length: int) -> str:
        """
        Return 2 * length lowercase hex characters, one word per byte.

        Args:
            length: Number of bytes (each byte becomes 2 hex chars)
        """
        validate_length(length)
        return self._rand_bytes(length).hex()

    def next_bytes(self, length: int) -> bytes:
        """Return exactly length bytes, one word per byte."""
        validate_length(length)
        return self._rand_bytes(length)

    def next_base64(self, length: int) -> str:
        """Standard padded Base64 of next_bytes(length)."""
        return base64.b64encode(self.next_bytes(length)).decode("ascii")

    def next_uuid(self) -> str:
        """Return an RFC 4122 version 4 UUID string drawn from this stream."""
        data = bytearray(self._rand_bytes(16))
        data[6] = (data[6] & 0x0F) | 0x40  # version 4
        data[8] = (data[8] & 0x3F) | 0x80  # RFC 4122 variant
        return str(uuid.UUID(bytes=bytes(data)))

    # === checkpoint ===

    def checkpoint(self) -> SecureCheckpoint:
        return SecureCheckpoint(
            initial_seed=self._initial_seed,
            current_seed=self._seed,
            iterations=self._iterations,
            buffer=list(self._buffer),
            cursor=self._cursor,
            acc_a=self._acc_a,
            acc_b=self._acc_b,
            acc_c=self._acc_c,
        )

    def restore(self, checkpoint: SecureCheckpoint | Mapping[str, Any]) -> None:
        loaded = self._load_checkpoint(checkpoint, SecureCheckpoint)
        self._initial_seed = loaded.initial_seed
        self._seed = loaded.current_seed
        self._iterations = loaded.iterations
        self._buffer = list(loaded.buffer)
        self._cursor = loaded.cursor
        self._acc_a = loaded.acc_a
        self._acc_b = loaded.acc_b
        self._acc_c = loaded.acc_c
