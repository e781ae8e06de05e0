from __future__ import annotations

from dataclasses import dataclass, field

from route_timer.application.exceptions import StopwatchStateError
from route_timer.application.ports.clock import MonotonicTicker, Ticker


@dataclass
class Stopwatch:
    """Single-shot timer: started once, stopped once."""

    ticker: Ticker = field(default_factory=MonotonicTicker)
    _started_at: int | None = field(default=None, init=False)
    _elapsed_ns: int | None = field(default=None, init=False)

    @classmethod
    def start_new(cls, ticker: Ticker | None = None) -> Stopwatch:
        watch = cls(ticker or MonotonicTicker())
        watch.start()
        return watch

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._elapsed_ns is None

    def start(self) -> None:
        if self._started_at is not None:
            raise StopwatchStateError("Stopwatch already started")
        self._started_at = self.ticker.nanos()

    def stop(self) -> None:
        if self._started_at is None or self._elapsed_ns is not None:
            raise StopwatchStateError("Stopwatch is not running")
        self._elapsed_ns = self.ticker.nanos() - self._started_at

    @property
    def total_nanos(self) -> int:
        if self._elapsed_ns is None:
            raise StopwatchStateError("Stopwatch has not been stopped")
        return self._elapsed_ns

    @property
    def total_millis(self) -> int:
        return self.total_nanos // 1_000_000
