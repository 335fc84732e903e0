"""Value models shared by the generators."""
from typing import Annotated, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from seeded_rng.config import settings


T = TypeVar("T")

# Secure generator geometry
BUFFER_SIZE = 256
MASK32 = 0xFFFFFFFF

Word32 = Annotated[int, Field(ge=0, le=MASK32)]


class WeightedItem(BaseModel, Generic[T]):
    """An alternative for weighted_pick; higher weight means more likely."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    item: T
    weight: Union[StrictFloat, StrictInt]


class RNGStats(BaseModel):
    """Read-only snapshot of a generator's seed state."""

    model_config = ConfigDict(frozen=True)

    initial_seed: int
    current_seed: int
    iterations: int


class FastCheckpoint(BaseModel):
    """
    Full resumable state of a SeededRNG.

    initial_seed + current_seed is enough to continue the exact sequence;
    iterations is carried so get_stats() also survives a round trip.
    """

    kind: Literal["fast"] = "fast"
    version: str = Field(default_factory=lambda: settings.checkpoint_version)
    initial_seed: int
    current_seed: int
    iterations: int = Field(default=0, ge=0)


class SecureCheckpoint(BaseModel):
    """
    Full resumable state of a SecureSeededRNG.

    Unlike set_seed()/reset(), restoring this resumes mid-batch.
    """

    kind: Literal["secure"] = "secure"
    version: str = Field(default_factory=lambda: settings.checkpoint_version)
    initial_seed: int
    current_seed: int
    iterations: int = Field(default=0, ge=0)
    buffer: list[Word32] = Field(min_length=BUFFER_SIZE, max_length=BUFFER_SIZE)
    cursor: int = Field(ge=0, le=BUFFER_SIZE)
    acc_a: Word32
    acc_b: Word32
    acc_c: Word32
