"""Metric registry backed by a prometheus_client Summary labelled by key."""
from __future__ import annotations

import threading

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Summary, generate_latest

from route_timer.application.exceptions import MetricsError
from route_timer.application.ports.metrics import TimeUnit

CONTENT_TYPE = CONTENT_TYPE_LATEST


class PrometheusTimer:
    """Implements application.ports.metrics.Timer."""

    def __init__(self, summary: Summary, name: str) -> None:
        self._child = summary.labels(key=name)

    def update(self, duration: float, unit: TimeUnit) -> None:
        if duration < 0:
            return
        self._child.observe(TimeUnit.SECONDS.convert(duration, unit))


class PrometheusMetricRegistry:
    """Implements application.ports.metrics.MetricRegistry."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.collector_registry = registry or CollectorRegistry()
        self._summary = Summary(
            "http_server_request_duration_seconds",
            "HTTP request duration in seconds, by derived timer key",
            ["key"],
            registry=self.collector_registry,
        )
        self._lock = threading.Lock()
        self._timers: dict[str, PrometheusTimer] = {}

    def timer(self, name: str) -> PrometheusTimer:
        if not name:
            raise MetricsError("Timer name must not be empty")
        with self._lock:
            timer = self._timers.get(name)
            if timer is None:
                timer = self._timers[name] = PrometheusTimer(self._summary, name)
            return timer

    def render(self) -> bytes:
        return generate_latest(self.collector_registry)
