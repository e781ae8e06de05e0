from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from route_timer.api.middleware.request_timer import RequestTimerMiddleware
from route_timer.api.v1.routers import health, hello, metrics
from route_timer.application.ports.metrics import MetricRegistry
from route_timer.config import settings
from route_timer.infrastructure.metrics.log_reporter import LogReporter
from route_timer.infrastructure.metrics.memory_registry import InMemoryMetricRegistry
from route_timer.infrastructure.metrics.prometheus_registry import PrometheusMetricRegistry

logger = logging.getLogger(__name__)


def build_registry() -> MetricRegistry:
    if settings.METRICS_BACKEND == "prometheus":
        return PrometheusMetricRegistry()
    return InMemoryMetricRegistry()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    registry = app.state.metric_registry
    reporter: LogReporter | None = None
    if isinstance(registry, InMemoryMetricRegistry):
        reporter = LogReporter(registry, settings.REPORTER_INTERVAL_SECONDS)
        await reporter.start()
    app.state.reporter = reporter

    yield

    if reporter is not None:
        await reporter.stop()


def create_app(registry: MetricRegistry | None = None) -> FastAPI:
    app = FastAPI(
        title="Route Timer Demo",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.metric_registry = registry if registry is not None else build_registry()
    logger.info("Metric registry: %s", type(app.state.metric_registry).__name__)

    app.include_router(health.router)
    app.include_router(hello.router)
    app.include_router(metrics.router)

    # Added last so it wraps every other middleware.
    app.add_middleware(
        RequestTimerMiddleware,
        registry=app.state.metric_registry,
        excluded_paths=settings.METRICS_EXCLUDED_PATHS,
    )
    return app
