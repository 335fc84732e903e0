"""Entropy sources and unseeded construction policy."""
import logging

import pytest

from seeded_rng import (
    EntropyUnavailableError,
    ErrorCode,
    FixedEntropySource,
    SecureSeededRNG,
    SeededRNG,
    StrongEntropySource,
    WeakEntropySource,
)
from seeded_rng.config import settings
from seeded_rng.logic.entropy import draw_seed


class TestSources:
    """Individual entropy sources."""

    def test_fixed_source_cycles(self):
        source = FixedEntropySource([3, 7])
        assert [source.randbelow(100) for _ in range(4)] == [3, 7, 3, 7]

    def test_fixed_source_reduces_modulo_bound(self):
        assert FixedEntropySource([105]).randbelow(100) == 5

    def test_fixed_source_requires_values(self):
        with pytest.raises(ValueError):
            FixedEntropySource([])

    def test_weak_source_in_range(self):
        source = WeakEntropySource()
        assert all(0 <= source.randbelow(10) < 10 for _ in range(100))

    def test_strong_source_in_range(self):
        source = StrongEntropySource()
        assert all(0 <= source.randbelow(2**32) < 2**32 for _ in range(10))

    def test_strong_source_wraps_missing_os_pool(self, monkeypatch):
        def unavailable(n):
            raise NotImplementedError("no entropy pool")

        monkeypatch.setattr("seeded_rng.logic.entropy.secrets.randbelow", unavailable)
        with pytest.raises(EntropyUnavailableError) as exc_info:
            StrongEntropySource().randbelow(10)
        assert exc_info.value.code == ErrorCode.ENTROPY_UNAVAILABLE
        assert exc_info.value.recoverable is True


class TestInjectedSource:
    """Generators take an injected source for unseeded construction."""

    def test_fast_uses_injected_source(self, fixed_entropy):
        assert SeededRNG(entropy=fixed_entropy).get_initial_seed() == 1234

    def test_secure_uses_injected_source(self, fixed_entropy):
        assert SecureSeededRNG(entropy=fixed_entropy).get_initial_seed() == 1234

    def test_injected_seed_replays_like_explicit_seed(self, fixed_entropy):
        unseeded = SecureSeededRNG(entropy=fixed_entropy)
        assert unseeded.next_hex(8) == SecureSeededRNG(1234).next_hex(8)

    def test_explicit_seed_ignores_source(self, fixed_entropy):
        assert SeededRNG(9, entropy=fixed_entropy).get_initial_seed() == 9

    def test_draw_seed_reports_source_name(self, fixed_entropy):
        assert draw_seed(10_000, fixed_entropy) == (1234, "fixed")


class TestStrongEntropyFallback:
    """Secure generator behavior when the OS pool is unreachable."""

    def test_falls_back_loudly_by_default(self, broken_strong_entropy, recording_telemetry, caplog):
        with caplog.at_level(logging.WARNING, logger="seeded_rng.logic.entropy"):
            rng = SecureSeededRNG()

        assert 0 <= rng.get_initial_seed() <= SecureSeededRNG.SEED_MAX
        assert "Strong entropy unavailable" in caplog.text

        fallback_events = recording_telemetry.get_events("entropy_fallback")
        assert len(fallback_events) == 1
        assert fallback_events[0]["kind"] == "secure"

        seeded_events = recording_telemetry.get_events("generator_seeded")
        assert seeded_events[0]["entropy_source"] == "random"

    def test_fails_when_strong_entropy_required(self, broken_strong_entropy, monkeypatch):
        monkeypatch.setattr(settings, "require_strong_entropy", True)
        with pytest.raises(EntropyUnavailableError):
            SecureSeededRNG()

    def test_seeded_construction_never_needs_entropy(self, broken_strong_entropy, monkeypatch):
        monkeypatch.setattr(settings, "require_strong_entropy", True)
        assert SecureSeededRNG(42).get_initial_seed() == 42

    def test_fast_generator_uses_weak_source(self, broken_strong_entropy, recording_telemetry):
        SeededRNG()
        assert recording_telemetry.get_events("entropy_fallback") == []
        assert recording_telemetry.get_events("generator_seeded")[0]["entropy_source"] == "random"
