"""
Middleware package for the exporter application.

Contains:
- MetricsMiddleware: Request tracking for the exporter's own endpoints
"""

from redfish_exporter.middleware.metrics import (
    MetricsMiddleware,
    exporter_registry,
    get_metrics_text,
    get_metrics_content_type,
    normalize_endpoint
)

__all__ = [
    "MetricsMiddleware",
    "exporter_registry",
    "get_metrics_text",
    "get_metrics_content_type",
    "normalize_endpoint"
]
