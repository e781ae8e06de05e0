"""Outermost middleware timing every logical request into a metric registry."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Scope

from route_timer.application.ports.clock import Ticker
from route_timer.application.ports.metrics import MetricRegistry, TimeUnit
from route_timer.domain.entities.request_context import RequestContext
from route_timer.domain.metric_key import derive_metric_key
from route_timer.domain.value_objects.http_status import read_status

logger = logging.getLogger(__name__)

ATTRIBUTE_CONTEXT = f"{__name__}.RequestTimerMiddleware.Stopwatch"


def effective_path(scope: Scope) -> str:
    """Decoded request path relative to the application root."""
    path: str = scope.get("path", "") or "/"
    root_path: str = scope.get("root_path", "")
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        path = path[len(root_path):] or "/"
    return path


def best_matching_pattern(scope: Scope) -> str | None:
    route = scope.get("route")
    if route is None:
        return None
    pattern = getattr(route, "path", None)
    return str(pattern) if pattern is not None else None


def get_request_context(request: Request) -> RequestContext | None:
    return request.scope.get("state", {}).get(ATTRIBUTE_CONTEXT)


def suspend_for_continuation(request: Request) -> None:
    """Keep the request's timer running until the scope is dispatched again."""
    context = get_request_context(request)
    if context is not None:
        context.suspend()


class RequestTimerMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        registry: MetricRegistry,
        *,
        excluded_paths: Iterable[str] = (),
        ticker: Ticker | None = None,
    ) -> None:
        super().__init__(app)
        self.registry = registry
        self.excluded_paths = frozenset(excluded_paths)
        self._ticker = ticker

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = effective_path(request.scope)
        if path in self.excluded_paths:
            return await call_next(request)

        context = self._context_for(request, path)
        context.method = request.method
        context.path = path
        stopwatch = context.enter(self._ticker)
        status = 500
        try:
            response = await call_next(request)
            status = read_status(response)
            return response
        finally:
            if not context.suspended:
                context.complete()
                self._state(request).pop(ATTRIBUTE_CONTEXT, None)
                context.route_pattern = best_matching_pattern(request.scope)
                self._record_time(context, status, stopwatch.total_millis)

    @staticmethod
    def _state(request: Request) -> dict[str, Any]:
        return request.scope.setdefault("state", {})

    def _context_for(self, request: Request, path: str) -> RequestContext:
        state = self._state(request)
        context = state.get(ATTRIBUTE_CONTEXT)
        if context is None:
            context = RequestContext(method=request.method, path=path)
            state[ATTRIBUTE_CONTEXT] = context
        return context

    def _record_time(self, context: RequestContext, status: int, millis: int) -> None:
        timer_name = derive_metric_key(
            context.method, context.path, context.route_pattern, status,
        )
        try:
            self.registry.timer(timer_name).update(millis, TimeUnit.MILLISECONDS)
        except Exception:
            logger.warning("Unable to submit timer '%s'", timer_name, exc_info=True)
