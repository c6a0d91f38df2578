"""
Exporter Metrics Middleware - Request tracking for the exporter's own endpoints.

These metrics live on a registry separate from the Redfish target registries so
that a target scrape never contains exporter request metrics:
- Request count per endpoint
- Request duration histogram
- Error counts
"""

import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST, CollectorRegistry


# ============================================================================
# Prometheus Metrics Registry
# ============================================================================

exporter_registry = CollectorRegistry()

KNOWN_ENDPOINTS = ("/metrics", "/redfish", "/health", "/")

http_requests_total = Counter(
    'redfish_exporter_http_requests_total',
    'Total number of HTTP requests served by the exporter',
    ['method', 'endpoint', 'status_code'],
    registry=exporter_registry
)

http_request_duration_seconds = Histogram(
    'redfish_exporter_http_request_duration_seconds',
    'HTTP request duration in seconds, including Redfish traversal',
    ['method', 'endpoint'],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=exporter_registry
)

http_errors_total = Counter(
    'redfish_exporter_http_errors_total',
    'Total number of HTTP errors returned by the exporter',
    ['method', 'endpoint', 'error_type'],
    registry=exporter_registry
)


# ============================================================================
# Metrics Middleware
# ============================================================================

class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware recording request count, duration and errors."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/exporter/metrics":
            return await call_next(request)

        start_time = time.time()
        endpoint = normalize_endpoint(request.url.path)
        method = request.method

        try:
            response = await call_next(request)
        except Exception as exc:
            http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                error_type=exc.__class__.__name__
            ).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(time.time() - start_time)
            raise

        status_code = response.status_code
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(time.time() - start_time)

        if status_code >= 400:
            error_type = "client_error" if status_code < 500 else "server_error"
            http_errors_total.labels(method=method, endpoint=endpoint, error_type=error_type).inc()

        return response


def normalize_endpoint(path: str) -> str:
    """Collapse unknown paths into 'other' so the endpoint label stays bounded."""
    if path != "/":
        path = path.rstrip("/")
    return path if path in KNOWN_ENDPOINTS else "other"


# ============================================================================
# Metrics Export Functions
# ============================================================================

def get_metrics_text() -> bytes:
    """Prometheus text format for the exporter's own metrics."""
    return generate_latest(exporter_registry)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
