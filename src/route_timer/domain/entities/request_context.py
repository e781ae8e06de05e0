from __future__ import annotations

from dataclasses import dataclass

from route_timer.application.exceptions import StopwatchStateError
from route_timer.application.ports.clock import Ticker
from route_timer.domain.entities.stopwatch import Stopwatch
from route_timer.domain.value_objects.enums import RequestLifecycle


@dataclass
class RequestContext:
    """State of one logical request, carried across dispatch cycles.

    The stopwatch is attached on the first dispatch and detached when the
    request completes. A request marked ``SUSPENDED`` keeps its stopwatch
    until a later dispatch finishes without suspending again.
    """

    method: str
    path: str
    route_pattern: str | None = None
    lifecycle: RequestLifecycle = RequestLifecycle.ACTIVE
    stopwatch: Stopwatch | None = None
    dispatch_count: int = 0

    @property
    def suspended(self) -> bool:
        return self.lifecycle == RequestLifecycle.SUSPENDED

    def enter(self, ticker: Ticker | None = None) -> Stopwatch:
        """Begin a dispatch cycle, starting the stopwatch on first entry."""
        if self.lifecycle == RequestLifecycle.COMPLETED:
            raise StopwatchStateError("Request already completed")
        self.lifecycle = RequestLifecycle.ACTIVE
        self.dispatch_count += 1
        if self.stopwatch is None:
            self.stopwatch = Stopwatch.start_new(ticker)
        return self.stopwatch

    def suspend(self) -> None:
        if self.lifecycle != RequestLifecycle.ACTIVE:
            raise StopwatchStateError(f"Cannot suspend a {self.lifecycle} request")
        self.lifecycle = RequestLifecycle.SUSPENDED

    def complete(self) -> Stopwatch:
        """Stop and detach the stopwatch. Only valid from ``ACTIVE``."""
        if self.lifecycle != RequestLifecycle.ACTIVE or self.stopwatch is None:
            raise StopwatchStateError(f"Cannot complete a {self.lifecycle} request")
        stopwatch = self.stopwatch
        stopwatch.stop()
        self.stopwatch = None
        self.lifecycle = RequestLifecycle.COMPLETED
        return stopwatch
