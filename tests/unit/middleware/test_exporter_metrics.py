"""
Unit tests for the exporter metrics middleware helpers
"""
import pytest

from redfish_exporter.middleware.metrics import normalize_endpoint


@pytest.mark.parametrize("path,expected", [
    ("/metrics", "/metrics"),
    ("/metrics/", "/metrics"),
    ("/redfish", "/redfish"),
    ("/health", "/health"),
    ("/", "/"),
    ("/redfish/v1/Managers", "other"),
    ("/favicon.ico", "other"),
])
def test_normalize_endpoint(path, expected):
    assert normalize_endpoint(path) == expected
