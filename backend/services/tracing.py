"""Observability hook for scoring code.

Scoring functions never log match details themselves. They take an optional
tracer and emit named events with structured fields; what happens to those
events (debug logging, collection in tests, nothing) is up to the tracer.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ScoringTracer:
    """Receives structured trace events. The base implementation drops them."""

    def emit(self, event: str, **fields: Any) -> None:
        return None


class NullTracer(ScoringTracer):
    pass


class LoggingTracer(ScoringTracer):
    """Writes every event as one DEBUG record on the given logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, event: str, **fields: Any) -> None:
        if self._log.isEnabledFor(logging.DEBUG):
            rendered = " ".join(f"{k}={v!r}" for k, v in fields.items())
            self._log.debug("%s %s", event, rendered)


class RecordingTracer(ScoringTracer):
    """Keeps events in memory as (event, fields) tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def named(self, event: str) -> list[dict[str, Any]]:
        return [fields for name, fields in self.events if name == event]


NULL_TRACER = NullTracer()


def get_tracer(enabled: bool) -> ScoringTracer:
    """Tracer for production wiring: debug logging when enabled, otherwise none."""
    return LoggingTracer() if enabled else NULL_TRACER
