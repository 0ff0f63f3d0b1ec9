"""Prometheus instrumentation for the wage engine HTTP API."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

from .config import service_env, service_version

# Calculation requests are CPU-bound and short; the top bucket catches stalls.
_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5)
_LABELS = ["service", "version", "env"]

HTTP_REQUESTS = Counter(
    "wage_engine_http_requests_total",
    "HTTP requests served, by route and status",
    _LABELS + ["method", "route", "status"],
)
HTTP_LATENCY = Histogram(
    "wage_engine_http_request_duration_seconds",
    "Time spent serving HTTP requests",
    _LABELS + ["method", "route"],
    buckets=_LATENCY_BUCKETS,
)
HTTP_IN_FLIGHT = Gauge(
    "wage_engine_http_requests_in_flight",
    "HTTP requests currently being served",
    _LABELS,
)
SERVICE_INFO = Gauge(
    "wage_engine_service_info",
    "Always 1; labels identify the running build",
    _LABELS,
)

METRICS_PATH = "/metrics"


@dataclass(frozen=True)
class Observability:
    """Label set for one running service plus the hooks that use it."""

    service: str
    version: str = field(default_factory=service_version)
    env: str = field(default_factory=service_env)

    @property
    def labels(self) -> Dict[str, str]:
        return {"service": self.service, "version": self.version, "env": self.env}

    def instrument(self, app: FastAPI) -> None:
        """Add the request middleware and ``/metrics`` to ``app`` once."""
        if getattr(app.state, "wage_engine_instrumented", False):
            return
        app.state.wage_engine_instrumented = True
        SERVICE_INFO.labels(**self.labels).set(1)
        labels = self.labels

        @app.middleware("http")
        async def _record_request(request: Request, call_next):
            if request.url.path == METRICS_PATH:
                return await call_next(request)
            started = time.perf_counter()
            status = "500"
            in_flight = HTTP_IN_FLIGHT.labels(**labels)
            in_flight.inc()
            try:
                response = await call_next(request)
                status = str(response.status_code)
                return response
            finally:
                in_flight.dec()
                # Templated path keeps label cardinality bounded.
                route = getattr(request.scope.get("route"), "path", "unmatched")
                HTTP_LATENCY.labels(method=request.method, route=route, **labels).observe(
                    time.perf_counter() - started
                )
                HTTP_REQUESTS.labels(method=request.method, route=route, status=status, **labels).inc()

        @app.get(METRICS_PATH, include_in_schema=False)
        def _metrics() -> Response:
            return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = ["Observability", "HTTP_REQUESTS", "HTTP_LATENCY", "HTTP_IN_FLIGHT", "METRICS_PATH"]
