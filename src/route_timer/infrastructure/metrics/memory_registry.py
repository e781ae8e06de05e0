"""In-process metric registry keeping running duration statistics per timer."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from route_timer.application.exceptions import MetricsError
from route_timer.application.ports.metrics import TimeUnit


@dataclass(frozen=True)
class TimerSnapshot:
    count: int
    total_ns: float
    min_ns: float
    max_ns: float

    @property
    def mean_ns(self) -> float:
        return self.total_ns / self.count if self.count else 0.0

    def as_dict(self, unit: TimeUnit = TimeUnit.MILLISECONDS) -> dict[str, Any]:
        return {
            "count": self.count,
            "min": unit.convert(self.min_ns, TimeUnit.NANOSECONDS),
            "max": unit.convert(self.max_ns, TimeUnit.NANOSECONDS),
            "mean": unit.convert(self.mean_ns, TimeUnit.NANOSECONDS),
            "total": unit.convert(self.total_ns, TimeUnit.NANOSECONDS),
            "unit": unit.name.lower(),
        }


class InMemoryTimer:
    """Implements application.ports.metrics.Timer."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0
        self._total = 0.0
        self._min = 0.0
        self._max = 0.0

    def update(self, duration: float, unit: TimeUnit) -> None:
        if duration < 0:
            return
        nanos = unit.to_nanos(duration)
        with self._lock:
            if self._count == 0:
                self._min = self._max = nanos
            else:
                self._min = min(self._min, nanos)
                self._max = max(self._max, nanos)
            self._count += 1
            self._total += nanos

    @property
    def count(self) -> int:
        return self._count

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return TimerSnapshot(self._count, self._total, self._min, self._max)


class InMemoryMetricRegistry:
    """Implements application.ports.metrics.MetricRegistry."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timers: dict[str, InMemoryTimer] = {}

    def timer(self, name: str) -> InMemoryTimer:
        if not name:
            raise MetricsError("Timer name must not be empty")
        with self._lock:
            timer = self._timers.get(name)
            if timer is None:
                timer = self._timers[name] = InMemoryTimer()
            return timer

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._timers)

    def snapshot(self) -> dict[str, TimerSnapshot]:
        with self._lock:
            timers = dict(self._timers)
        return {name: timers[name].snapshot() for name in sorted(timers)}
