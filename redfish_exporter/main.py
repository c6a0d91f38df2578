from fastapi import FastAPI
from contextlib import asynccontextmanager
from prometheus_client import CollectorRegistry
from typing import Optional
import logging

from redfish_exporter import __version__
from redfish_exporter.api import metrics, system
from redfish_exporter.config import Settings
from redfish_exporter.deps import get_settings
from redfish_exporter.middleware import MetricsMiddleware
from redfish_exporter.services.collectors import RedfishCollector

logger = logging.getLogger(__name__)


def install_collector(app: FastAPI, collector: RedfishCollector) -> None:
    """Register the default target collector on a dedicated registry."""
    registry = CollectorRegistry()
    registry.register(collector)
    app.state.target_collector = collector
    app.state.target_registry = registry


def create_app(settings: Optional[Settings] = None, collector: Optional[RedfishCollector] = None) -> FastAPI:
    """
    Build the exporter application.

    Args:
        settings: Settings used to bootstrap the default target at startup
        collector: Pre-built default target collector (skips bootstrap)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Redfish Exporter {__version__} - Starting up")
        if app.state.target_collector is None:
            app_settings = settings or get_settings()
            default_collector = RedfishCollector.from_settings(app_settings)
            if not default_collector.up:
                if app_settings.EXIT_ON_BOOTSTRAP_FAILURE:
                    raise RuntimeError(
                        f"Redfish bootstrap failed for {default_collector.host or 'default target'}: "
                        f"{default_collector.connection.error}"
                    )
                logger.warning("Default target is down, serving redfish_up 0")
            install_collector(app, default_collector)
        yield
        if app.state.target_collector is not None:
            app.state.target_collector.close()
        logger.info("Application shutdown")

    app = FastAPI(
        title="Redfish Exporter",
        description="Prometheus exporter for Redfish BMC status",
        version=__version__,
        lifespan=lifespan
    )
    app.state.target_collector = None
    app.state.target_registry = None
    if collector is not None:
        install_collector(app, collector)

    app.add_middleware(MetricsMiddleware)

    app.include_router(metrics.router, tags=["Metrics"])
    app.include_router(system.router, tags=["System"])

    return app


app = create_app()
