# textshare/observability/metrics.py
# minimal prometheus instrumentation

from __future__ import annotations

import time

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# all textshare metrics live in this registry, exposed at /metrics
REGISTRY = CollectorRegistry()

LINKS_GENERATED = Counter(
    "textshare_links_generated",
    "Links generated from submitted text",
    registry=REGISTRY,
)
LINK_DECODES = Counter(
    "textshare_link_decodes",
    "Incoming link tokens by decode outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)
PERSISTENCE_FAILURES = Counter(
    "textshare_persistence_failures",
    "Local storage reads or writes that failed",
    labelnames=("operation",),
    registry=REGISTRY,
)
REQUEST_COUNT = Counter(
    "request_count",
    "Total request count",
    labelnames=("method", "path", "status"),
    registry=REGISTRY,
)
REQUEST_LATENCY = Histogram(
    "request_latency_seconds",
    "Request latency in seconds",
    registry=REGISTRY,
)


def record_decode(succeeded: bool) -> None:
    LINK_DECODES.labels("ok" if succeeded else "failed").inc()


def record_persistence_failure(operation: str) -> None:
    PERSISTENCE_FAILURES.labels(operation).inc()


def render_latest() -> tuple[bytes, str]:
    """Exposition payload and its content type."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST


def instrument_fastapi(app) -> None:
    """// register request counters and latency for every route"""

    @app.middleware("http")
    async def _prometheus_middleware(request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        # label by route template, not raw path, to keep cardinality bounded
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        REQUEST_LATENCY.observe(time.perf_counter() - start)
        REQUEST_COUNT.labels(request.method, path, str(response.status_code)).inc()
        return response
