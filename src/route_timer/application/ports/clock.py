from __future__ import annotations

import time
from typing import Protocol


class Ticker(Protocol):
    def nanos(self) -> int: ...


class MonotonicTicker:
    """Default monotonic clock implementation."""

    def nanos(self) -> int:
        return time.perf_counter_ns()
