"""Periodic reporter that writes timer statistics to the log."""
from __future__ import annotations

import asyncio
import logging
import time

from route_timer.application.ports.metrics import TimeUnit
from route_timer.infrastructure.metrics.memory_registry import InMemoryMetricRegistry

logger = logging.getLogger(__name__)


class LogReporter:
    """Background task logging every timer once per interval."""

    def __init__(
        self,
        registry: InMemoryMetricRegistry,
        interval: float,
        *,
        duration_unit: TimeUnit = TimeUnit.MILLISECONDS,
        reporter_logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._interval = interval
        self._duration_unit = duration_unit
        self._logger = reporter_logger or logger
        self._task: asyncio.Task[None] | None = None
        self._last_counts: dict[str, int] = {}
        self._last_report = time.monotonic()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self._interval <= 0:
            self._logger.info("Log reporter disabled (interval=%.1fs)", self._interval)
            return
        self._last_report = time.monotonic()
        self._task = asyncio.create_task(self._run(), name="metrics-log-reporter")
        self._logger.info("Log reporter started (interval=%.1fs)", self._interval)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            self.report()
            self._logger.info("Log reporter stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.report()
            except Exception:
                self._logger.exception("Log reporter error")

    def report(self) -> None:
        now = time.monotonic()
        elapsed = max(now - self._last_report, 1e-9)
        self._last_report = now
        unit = self._duration_unit.name.lower()
        for name, snap in self._registry.snapshot().items():
            previous = self._last_counts.get(name, 0)
            self._last_counts[name] = snap.count
            stats = snap.as_dict(self._duration_unit)
            self._logger.info(
                "type=TIMER, name=%s, count=%d, min=%.3f, max=%.3f, mean=%.3f, "
                "rate=%.3f, rate_unit=events/second, duration_unit=%s",
                name,
                snap.count,
                stats["min"],
                stats["max"],
                stats["mean"],
                (snap.count - previous) / elapsed,
                unit,
            )
