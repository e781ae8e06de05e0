from __future__ import annotations

from enum import Enum
from typing import Protocol


class TimeUnit(Enum):
    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000

    def to_nanos(self, duration: float) -> float:
        return duration * self.value

    def convert(self, duration: float, source: TimeUnit) -> float:
        """Convert ``duration`` expressed in ``source`` into this unit."""
        return source.to_nanos(duration) / self.value


class Timer(Protocol):
    def update(self, duration: float, unit: TimeUnit) -> None: ...


class MetricRegistry(Protocol):
    """Metrics sink: get-or-create a named timer. Must be thread-safe."""

    def timer(self, name: str) -> Timer: ...
