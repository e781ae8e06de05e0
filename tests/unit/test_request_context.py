from __future__ import annotations

import pytest

from route_timer.application.exceptions import StopwatchStateError
from route_timer.domain.entities.request_context import RequestContext
from route_timer.domain.entities.stopwatch import Stopwatch
from route_timer.domain.value_objects.enums import RequestLifecycle


def test_stopwatch_measures_elapsed(ticker):
    watch = Stopwatch.start_new(ticker)
    watch.stop()
    assert watch.total_nanos == ticker.step_ns
    assert watch.total_millis == 5


def test_stopwatch_cannot_stop_twice(ticker):
    watch = Stopwatch.start_new(ticker)
    watch.stop()
    with pytest.raises(StopwatchStateError):
        watch.stop()


def test_stopwatch_total_requires_stop(ticker):
    watch = Stopwatch.start_new(ticker)
    assert watch.running
    with pytest.raises(StopwatchStateError):
        _ = watch.total_nanos


def test_enter_reuses_stopwatch_across_dispatches(ticker):
    ctx = RequestContext(method="GET", path="/poll")
    first = ctx.enter(ticker)
    ctx.suspend()
    second = ctx.enter(ticker)
    assert first is second
    assert ctx.dispatch_count == 2
    assert ctx.lifecycle == RequestLifecycle.ACTIVE


def test_complete_detaches_stopwatch(ticker):
    ctx = RequestContext(method="GET", path="/")
    ctx.enter(ticker)
    watch = ctx.complete()
    assert ctx.stopwatch is None
    assert ctx.lifecycle == RequestLifecycle.COMPLETED
    assert not watch.running


def test_suspended_request_cannot_complete(ticker):
    ctx = RequestContext(method="GET", path="/")
    ctx.enter(ticker)
    ctx.suspend()
    with pytest.raises(StopwatchStateError):
        ctx.complete()


def test_completed_request_cannot_reenter(ticker):
    ctx = RequestContext(method="GET", path="/")
    ctx.enter(ticker)
    ctx.complete()
    with pytest.raises(StopwatchStateError):
        ctx.enter(ticker)


def test_stopwatch_cannot_stop_before_start(ticker):
    with pytest.raises(StopwatchStateError):
        Stopwatch(ticker).stop()
