"""
Metrics API - Prometheus exposition endpoints.

This module provides endpoints for:
- /metrics: the default target, bootstrapped once at startup
- /redfish?target=<host>: multi-target mode, a fresh session per request
- /exporter/metrics: the exporter's own request metrics
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from typing import Optional
import logging

from redfish_exporter.config import Settings
from redfish_exporter.deps import get_settings
from redfish_exporter.middleware import get_metrics_text, get_metrics_content_type
from redfish_exporter.services.collectors import RedfishCollector
from redfish_exporter.services.redfish import ConnectionResult, open_connection

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/metrics")
def target_metrics(request: Request, settings: Settings = Depends(get_settings)):
    """
    Scrape the default Redfish target.

    Remote failures never turn into HTTP errors: an unreachable target is
    reported as ``redfish_up 0``.
    """
    registry = request.app.state.target_registry
    if registry is None:
        logger.warning("Default target collector is not initialised, serving redfish_up 0")
        registry = CollectorRegistry()
        registry.register(RedfishCollector(
            ConnectionResult(host=settings.REDFISH_HOST, error="collector not initialised"),
            namespace=settings.EXPORTER_NAMESPACE,
        ))
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


@router.get("/redfish")
def scrape_target(
    target: Optional[str] = Query(None, description="Redfish host to scrape"),
    settings: Settings = Depends(get_settings)
):
    """
    Scrape an arbitrary Redfish target with the configured credentials.

    A new session is opened for every request, so ``up`` reflects the target's
    reachability at the time of the request.
    """
    if not target:
        raise HTTPException(status_code=400, detail="'target' parameter must be specified")

    logger.debug(f"Scraping Redfish target {target}")
    collector = RedfishCollector(open_connection(settings, target), namespace=settings.EXPORTER_NAMESPACE)
    registry = CollectorRegistry()
    try:
        registry.register(collector)
        content = generate_latest(registry)
    finally:
        collector.close()

    return Response(content=content, media_type=CONTENT_TYPE_LATEST)


@router.get("/exporter/metrics")
def exporter_metrics():
    """Request metrics of the exporter process itself."""
    return Response(content=get_metrics_text(), media_type=get_metrics_content_type())
