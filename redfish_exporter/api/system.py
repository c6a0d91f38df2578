"""
System API - Exporter health and landing page.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from redfish_exporter import __version__
from redfish_exporter.models.responses import HealthResponse

router = APIRouter()

LANDING_PAGE = """<html>
<head><title>Redfish Exporter</title></head>
<body>
<h1>Redfish Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
<p><a href="/redfish?target=">Scrape a target</a></p>
<p><a href="/exporter/metrics">Exporter metrics</a></p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def read_root():
    return LANDING_PAGE


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request):
    """
    Health of the exporter process.

    The process is healthy even when the default target is down; ``up``
    carries the target's bootstrap outcome.
    """
    collector = request.app.state.target_collector
    if collector is None:
        return HealthResponse(status="starting", version=__version__, target="", up=0)

    return HealthResponse(
        status="healthy",
        version=__version__,
        target=collector.host,
        up=int(collector.up),
        error=collector.connection.error
    )
