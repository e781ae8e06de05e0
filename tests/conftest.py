"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from starlette.requests import Request

from route_timer.application.ports.metrics import TimeUnit


@dataclass
class FakeTicker:
    """Advances by ``step_ns`` on every read."""

    step_ns: int = 5_000_000
    now_ns: int = 0

    def nanos(self) -> int:
        value = self.now_ns
        self.now_ns += self.step_ns
        return value


@dataclass
class RecordingTimer:
    _samples: list[tuple[float, TimeUnit]] = field(default_factory=list)

    def update(self, duration: float, unit: TimeUnit) -> None:
        self._samples.append((duration, unit))


@dataclass
class FakeRegistry:
    _timers: dict[str, RecordingTimer] = field(default_factory=dict)

    def timer(self, name: str) -> RecordingTimer:
        return self._timers.setdefault(name, RecordingTimer())

    @property
    def samples(self) -> list[tuple[str, float, TimeUnit]]:
        return [
            (name, duration, unit)
            for name, timer in self._timers.items()
            for duration, unit in timer._samples
        ]


class FailingRegistry:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def timer(self, name: str) -> RecordingTimer:
        self.calls.append(name)
        raise RuntimeError("registry unavailable")


class FakeResponse:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code


class BrokenResponse:
    @property
    def status_code(self) -> int:
        raise RuntimeError("response already closed")


class FakeRoute:
    def __init__(self, path: str) -> None:
        self.path = path


def make_scope(
    method: str = "GET",
    path: str = "/",
    *,
    root_path: str = "",
) -> dict[str, Any]:
    return {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": root_path,
        "query_string": b"",
        "headers": [],
    }


def make_request(scope: dict[str, Any] | None = None) -> Request:
    return Request(scope if scope is not None else make_scope())


@pytest.fixture
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()
