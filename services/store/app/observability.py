from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, ProcessCollector, generate_latest

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from services.store.app.settings import StoreSettings


SERVICE_NAME = "store"

REGISTRY = CollectorRegistry()
ProcessCollector(registry=REGISTRY)

HTTP_REQUESTS = Counter(
    "store_http_requests_total",
    "HTTP requests by route template and status code",
    ["method", "route", "status"],
    registry=REGISTRY,
)
HTTP_LATENCY = Histogram(
    "store_http_request_duration_ms",
    "Time spent answering a request, in milliseconds",
    ["method", "route"],
    buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000, 2500),
    registry=REGISTRY,
)
WEBHOOK_EVENTS = Counter(
    "store_webhook_events_total",
    "Payment webhook deliveries by provider and outcome",
    ["provider", "outcome"],
    registry=REGISTRY,
)


def _route_label(request: Request) -> str:
    # Templates keep label cardinality bounded; static files and 404s share one bucket.
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


async def _observe(request: Request, call_next: Callable) -> Response:
    start = time.perf_counter()
    resp = await call_next(request)
    route = _route_label(request)
    HTTP_LATENCY.labels(request.method, route).observe((time.perf_counter() - start) * 1000)
    HTTP_REQUESTS.labels(request.method, route, str(resp.status_code)).inc()
    return resp


async def metrics() -> Response:
    return Response(generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def _enable_tracing(app: FastAPI) -> None:
    provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app)


def instrument(app: FastAPI, settings: StoreSettings) -> None:
    """Attach request metrics and `/metrics`; export traces over OTLP when enabled."""
    if settings.tracing_enabled:
        _enable_tracing(app)
    app.middleware("http")(_observe)
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)
