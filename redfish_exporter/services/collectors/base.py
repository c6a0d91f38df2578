"""
Base class for all Redfish sub-collectors.

A sub-collector owns one resource family (managers, memory, ...). It describes
a fixed set of metric descriptors and, on every scrape, traverses its family
through the shared Redfish client and returns the samples it produced.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple
import logging

from prometheus_client import Gauge

from redfish_exporter.models.metrics import LabeledSample, MetricDescriptor
from redfish_exporter.services.redfish import RedfishClient


class SubCollector(ABC):
    """
    Abstract base class for sub-collectors.

    Sub-collectors:
    - Don't open or authenticate connections (receive the shared client)
    - Return samples instead of writing to the metrics registry
    - Catch and log remote failures where they occur
    """

    #: Registry key and value of the ``collector`` scrape-status label
    name: str = ""

    def __init__(self, namespace: str, scrape_status: Gauge):
        """
        Initialize sub-collector

        Args:
            namespace: Metric namespace prefix
            scrape_status: Shared per-family scrape status gauge (label ``collector``)
        """
        self.namespace = namespace
        self.scrape_status = scrape_status
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def describe(self) -> Tuple[MetricDescriptor, ...]:
        """Return every descriptor this collector can emit."""
        pass

    @abstractmethod
    def collect(self, client: RedfishClient) -> List[LabeledSample]:
        """
        Traverse this resource family once.

        Returns:
            Samples for the current scrape, possibly empty
        """
        pass

    def mark_scrape(self, success: bool) -> None:
        self.scrape_status.labels(collector=self.name).set(1 if success else 0)
