"""Telemetry for generator lifecycle events."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from seeded_rng.config import settings


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a telemetry event."""
        ...


class LoggingTelemetrySink:
    """Default sink that logs telemetry events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log telemetry event."""
        logger.info("TELEMETRY %s: %s", event_name, data)


@dataclass
class GeneratorSeededEvent:
    """generator_seeded event, emitted when a seed is drawn from entropy.

    Carries the drawn seed so an unseeded run can be replayed.
    """

    kind: str  # "fast" | "secure"
    initial_seed: int
    entropy_source: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "kind": self.kind,
            "initial_seed": self.initial_seed,
            "entropy_source": self.entropy_source,
        }


@dataclass
class GeneratorForkedEvent:
    """generator_forked event."""

    kind: str
    parent_initial_seed: int
    parent_iterations: int
    child_seed: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "kind": self.kind,
            "parent_initial_seed": self.parent_initial_seed,
            "parent_iterations": self.parent_iterations,
            "child_seed": self.child_seed,
        }


@dataclass
class EntropyFallbackEvent:
    """entropy_fallback event, emitted when strong entropy is unreachable."""

    kind: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "kind": self.kind,
            "reason": self.reason,
        }


class TelemetryService:
    """Service for emitting generator telemetry events."""

    def __init__(self, sink: TelemetrySink | None = None):
        self._sink = sink or LoggingTelemetrySink()
        self._sink_errors = 0  # Counter for sink failures

    @property
    def sink(self) -> TelemetrySink:
        return self._sink

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def set_sink(self, sink: TelemetrySink) -> None:
        """Set the telemetry sink (useful for testing)."""
        self._sink = sink

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures MUST NOT break generator construction or draws.
        """
        if not settings.telemetry_enabled:
            return
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Telemetry sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_generator_seeded(self, event: GeneratorSeededEvent) -> None:
        self._safe_emit("generator_seeded", event.to_dict())

    def emit_generator_forked(self, event: GeneratorForkedEvent) -> None:
        self._safe_emit("generator_forked", event.to_dict())

    def emit_entropy_fallback(self, event: EntropyFallbackEvent) -> None:
        self._safe_emit("entropy_fallback", event.to_dict())


# Global instance
telemetry_service = TelemetryService()
