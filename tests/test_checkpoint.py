"""Checkpoint / restore round trips and rejection of bad checkpoints."""
import pytest

from seeded_rng import (
    ErrorCode,
    FastCheckpoint,
    InvalidCheckpointError,
    SecureCheckpoint,
    SecureSeededRNG,
    SeededRNG,
)


# Enough draws to cross into a second batch
BUFFER_DRAWS = 260


class TestFastCheckpoint:
    """SeededRNG checkpoints."""

    def test_json_round_trip_resumes_sequence(self):
        rng = SeededRNG(42)
        for _ in range(17):
            rng.next()
        payload = rng.checkpoint().model_dump_json()

        resumed = SeededRNG(0)
        resumed.restore(FastCheckpoint.model_validate_json(payload))

        assert resumed.get_stats() == rng.get_stats()
        assert [resumed.next() for _ in range(20)] == [rng.next() for _ in range(20)]

    def test_restore_from_dict(self):
        rng = SeededRNG(42)
        rng.next()
        resumed = SeededRNG(1)
        resumed.restore(rng.checkpoint().model_dump())
        assert resumed.next() == rng.next()

    def test_restored_generator_resets_to_checkpointed_origin(self):
        rng = SeededRNG(42)
        first = rng.next()
        resumed = SeededRNG(1)
        resumed.restore(rng.checkpoint())
        resumed.reset()
        assert resumed.get_initial_seed() == 42
        assert resumed.next() == first

    def test_checkpoint_carries_version(self):
        assert SeededRNG(42).checkpoint().version == "1"
        assert SeededRNG(42).checkpoint().kind == "fast"


class TestSecureCheckpoint:
    """SecureSeededRNG checkpoints resume mid-batch."""

    def test_mid_batch_json_round_trip(self):
        rng = SecureSeededRNG(42)
        for _ in range(300):
            rng.next()
        payload = rng.checkpoint().model_dump_json()

        resumed = SecureSeededRNG(1)
        resumed.restore(SecureCheckpoint.model_validate_json(payload))

        assert resumed.get_stats() == rng.get_stats()
        assert resumed.next_hex(300) == rng.next_hex(300)

    def test_checkpoint_is_a_copy(self):
        rng = SecureSeededRNG(42)
        checkpoint = rng.checkpoint()
        for _ in range(BUFFER_DRAWS):
            rng.next()
        resumed = SecureSeededRNG(1)
        resumed.restore(checkpoint)
        assert resumed.next() == SecureSeededRNG(42).next()

    def test_restore_from_dict(self):
        rng = SecureSeededRNG(5)
        rng.next_bytes(10)
        resumed = SecureSeededRNG(6)
        resumed.restore(rng.checkpoint().model_dump())
        assert resumed.next_uuid() == rng.next_uuid()


class TestRejection:
    """restore() refuses checkpoints it cannot apply."""

    def test_wrong_kind_model(self):
        with pytest.raises(InvalidCheckpointError) as exc_info:
            SeededRNG(1).restore(SecureSeededRNG(1).checkpoint())
        assert exc_info.value.code == ErrorCode.INVALID_CHECKPOINT

    def test_wrong_kind_dict(self):
        payload = SeededRNG(1).checkpoint().model_dump()
        with pytest.raises(InvalidCheckpointError):
            SecureSeededRNG(1).restore(payload)

    def test_short_buffer(self):
        payload = SecureSeededRNG(1).checkpoint().model_dump()
        payload["buffer"] = payload["buffer"][:10]
        with pytest.raises(InvalidCheckpointError):
            SecureSeededRNG(1).restore(payload)

    def test_word_out_of_range(self):
        payload = SecureSeededRNG(1).checkpoint().model_dump()
        payload["acc_a"] = 2**32
        with pytest.raises(InvalidCheckpointError):
            SecureSeededRNG(1).restore(payload)

    def test_cursor_out_of_range(self):
        payload = SecureSeededRNG(1).checkpoint().model_dump()
        payload["cursor"] = 257
        with pytest.raises(InvalidCheckpointError):
            SecureSeededRNG(1).restore(payload)

    def test_missing_field(self):
        with pytest.raises(InvalidCheckpointError):
            SeededRNG(1).restore({"kind": "fast", "initial_seed": 1})

    def test_version_mismatch(self):
        checkpoint = SeededRNG(1).checkpoint().model_copy(update={"version": "0"})
        with pytest.raises(InvalidCheckpointError):
            SeededRNG(1).restore(checkpoint)

    def test_model_mutated_after_creation(self):
        checkpoint = SecureSeededRNG(1).checkpoint()
        checkpoint.buffer = []
        rng = SecureSeededRNG(42)
        before = rng.checkpoint()
        with pytest.raises(InvalidCheckpointError) as exc_info:
            rng.restore(checkpoint)
        assert exc_info.value.code == ErrorCode.INVALID_CHECKPOINT
        assert rng.checkpoint() == before

    def test_fast_model_mutated_after_creation(self):
        checkpoint = SeededRNG(1).checkpoint()
        checkpoint.iterations = -5
        with pytest.raises(InvalidCheckpointError):
            SeededRNG(1).restore(checkpoint)

    def test_rejected_restore_leaves_state_alone(self):
        rng = SecureSeededRNG(42)
        before = rng.checkpoint()
        payload = before.model_dump()
        payload["cursor"] = -1
        with pytest.raises(InvalidCheckpointError):
            rng.restore(payload)
        assert rng.checkpoint() == before
