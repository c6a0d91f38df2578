"""Prometheus exporter for Redfish BMC status."""

__version__ = "0.1.0"
