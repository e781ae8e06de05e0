from __future__ import annotations

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from route_timer.infrastructure.metrics.memory_registry import InMemoryMetricRegistry
from route_timer.infrastructure.metrics.prometheus_registry import (
    CONTENT_TYPE,
    PrometheusMetricRegistry,
)

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics(request: Request) -> Response:
    registry = request.app.state.metric_registry
    if isinstance(registry, PrometheusMetricRegistry):
        return Response(content=registry.render(), media_type=CONTENT_TYPE)
    if isinstance(registry, InMemoryMetricRegistry):
        return JSONResponse(
            content={name: snap.as_dict() for name, snap in registry.snapshot().items()},
        )
    return JSONResponse(status_code=501, content={"detail": "Registry does not expose metrics"})
