"""
Pytest configuration and fixtures for all tests
"""
import pytest
from unittest.mock import Mock
from prometheus_client import Gauge

from redfish_exporter.config import Settings
from redfish_exporter.services.redfish import ConnectionResult, RedfishClient

from factories import make_manager


@pytest.fixture
def test_settings():
    """Override settings for testing"""
    return Settings(
        REDFISH_HOST="bmc.example.com",
        REDFISH_USERNAME="root",
        REDFISH_PASSWORD="calvin",
        REDFISH_TIMEOUT=5,
        _env_file=None
    )


@pytest.fixture
def scrape_status():
    """Unregistered scrape status gauge shared by sub-collectors"""
    return Gauge("collector_scrape_status", "collector_scrape_status", ["collector"],
                 namespace="redfish", registry=None)


@pytest.fixture
def mock_client():
    """Mock RedfishClient with one healthy manager, no log services and no systems"""
    client = Mock(spec=RedfishClient)
    client.get_managers.return_value = [make_manager()]
    client.get_log_services.return_value = []
    client.get_log_entries.return_value = []
    client.get_systems.return_value = []
    client.get_memory.return_value = []
    return client


@pytest.fixture
def up_connection(mock_client):
    """Bootstrap result for a reachable target"""
    return ConnectionResult(host="bmc.example.com", client=mock_client, up=True)


@pytest.fixture
def down_connection():
    """Bootstrap result for an unreachable target"""
    return ConnectionResult(host="bmc.example.com", error="connection refused")
