"""Pytest fixtures for seeded_rng tests."""
from typing import Any, Generator

import pytest

from seeded_rng.errors import EntropyUnavailableError
from seeded_rng.logic.entropy import FixedEntropySource
from seeded_rng.telemetry import telemetry_service


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large statistical samples)"
    )


class RecordingTelemetrySink:
    """Telemetry sink that keeps every emitted event in memory."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def get_events(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]


class FailingTelemetrySink:
    """Telemetry sink that always raises."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        raise RuntimeError("sink down")


class BrokenEntropySource:
    """Strong entropy stand-in for a sandbox without an OS entropy pool."""

    name = "secrets"

    def randbelow(self, n: int) -> int:
        raise EntropyUnavailableError("OS entropy source unavailable: no /dev/urandom")


@pytest.fixture
def recording_telemetry() -> Generator[RecordingTelemetrySink, None, None]:
    """Swap the global telemetry sink for a recording one."""
    original_sink = telemetry_service.sink
    sink = RecordingTelemetrySink()
    telemetry_service.set_sink(sink)

    yield sink

    telemetry_service.set_sink(original_sink)


@pytest.fixture
def fixed_entropy() -> FixedEntropySource:
    return FixedEntropySource([1234, 5678])


@pytest.fixture
def broken_strong_entropy(monkeypatch: pytest.MonkeyPatch) -> BrokenEntropySource:
    """Make the module-level strong entropy source unreachable."""
    source = BrokenEntropySource()
    monkeypatch.setattr("seeded_rng.logic.entropy.strong_entropy", source)
    return source
