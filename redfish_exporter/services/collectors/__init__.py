"""
Collectors Package - Redfish resource families exported as Prometheus gauges.

This package contains:
- RedfishCollector: top-level collector for one target (up, scrape duration)
- ManagerCollector: manager state/health/power and log service entry counts
- MemoryCollector: memory module state/health/capacity
- LogServiceTraversal: reusable log service child step
"""

from redfish_exporter.services.collectors.base import SubCollector
from redfish_exporter.services.collectors.logservice import LogServiceTraversal, count_by
from redfish_exporter.services.collectors.manager import ManagerCollector
from redfish_exporter.services.collectors.memory import MemoryCollector
from redfish_exporter.services.collectors.redfish import DEFAULT_COLLECTORS, RedfishCollector

__all__ = [
    "SubCollector",
    "LogServiceTraversal",
    "count_by",
    "ManagerCollector",
    "MemoryCollector",
    "DEFAULT_COLLECTORS",
    "RedfishCollector",
]
