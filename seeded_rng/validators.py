"""Precondition checks for generator operations.

All violations are rejected with a typed RNGError; nothing is silently
clamped or mirrored.
"""
import math
from typing import Any, Iterable

from pydantic import ValidationError

from seeded_rng.config import settings
from seeded_rng.errors import (
    InvalidCheckpointError,
    InvalidLengthError,
    InvalidRangeError,
    InvalidWeightsError,
)
from seeded_rng.logic.models import WeightedItem


def validate_range(min_value: float, max_value: float) -> None:
    """
    Validate a [min, max] range.

    Raises INVALID_RANGE if min > max. min == max is allowed.
    """
    if min_value > max_value:
        raise InvalidRangeError(
            f"Invalid range: min {min_value} is greater than max {max_value}."
        )


def validate_length(length: int) -> None:
    """Raises INVALID_LENGTH for negative output lengths."""
    if length < 0:
        raise InvalidLengthError(f"Length must be non-negative, got {length}.")


def validate_weights(items: Iterable[Any]) -> list[WeightedItem]:
    """
    Normalize weighted_pick input to a list of WeightedItem.

    Accepts WeightedItem instances or (item, weight) pairs.
    Raises INVALID_WEIGHTS for negative, non-finite or non-numeric weights;
    numeric strings and bools are not coerced.
    """
    normalized: list[WeightedItem] = []
    for entry in items:
        if isinstance(entry, WeightedItem):
            weighted = entry
        else:
            try:
                item, weight = entry
            except (TypeError, ValueError) as e:
                raise InvalidWeightsError(
                    f"Expected WeightedItem or (item, weight) pair, got {entry!r}."
                ) from e
            try:
                weighted = WeightedItem(item=item, weight=weight)
            except ValidationError as e:
                raise InvalidWeightsError(f"Invalid weight {weight!r}.") from e

        if not math.isfinite(weighted.weight) or weighted.weight < 0:
            raise InvalidWeightsError(
                f"Weights must be finite and non-negative, got {weighted.weight}."
            )
        normalized.append(weighted)
    return normalized


def validate_checkpoint_header(kind: str, expected_kind: str, version: str) -> None:
    """
    Validate checkpoint kind and format version.

    Raises INVALID_CHECKPOINT on mismatch.
    """
    if kind != expected_kind:
        raise InvalidCheckpointError(
            f"Cannot restore a {kind!r} checkpoint into a {expected_kind!r} generator."
        )
    if version != settings.checkpoint_version:
        raise InvalidCheckpointError(
            f"Checkpoint version {version!r} does not match "
            f"supported version {settings.checkpoint_version!r}."
        )
