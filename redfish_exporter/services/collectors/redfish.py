"""
Redfish Collector - Top-level prometheus_client collector for one target.

Owns the connection bootstrap outcome and a registry of sub-collectors keyed by
name. ``up`` is fixed when the collector is built: a target that could not be
reached at bootstrap only reports ``up`` and the scrape duration.
"""

from typing import Callable, Dict, Iterator, List, Optional, Sequence
import logging
import time

from prometheus_client import Gauge
from prometheus_client.core import GaugeMetricFamily, Metric

from redfish_exporter.config import Settings
from redfish_exporter.models.metrics import (
    LabeledSample,
    MetricDescriptor,
    build_fq_name,
    check_unique,
)
from redfish_exporter.services.collectors.base import SubCollector
from redfish_exporter.services.collectors.manager import ManagerCollector
from redfish_exporter.services.collectors.memory import MemoryCollector
from redfish_exporter.services.redfish import ConnectionResult, open_connection

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "redfish"
EXPORTER_SUBSYSTEM = "exporter"
BASE_LABEL_NAMES = ("host",)

SubCollectorFactory = Callable[[str, Gauge], SubCollector]

DEFAULT_COLLECTORS: Sequence[SubCollectorFactory] = (ManagerCollector, MemoryCollector)


def to_metric_families(
    descriptors: Sequence[MetricDescriptor],
    samples: Sequence[LabeledSample],
) -> List[GaugeMetricFamily]:
    """
    Group samples into one gauge family per descriptor.

    Families are returned in descriptor order; descriptors without samples in
    this scrape are left out.
    """
    by_name: Dict[str, List[LabeledSample]] = {}
    for sample in samples:
        by_name.setdefault(sample.descriptor.name, []).append(sample)

    families = []
    for descriptor in descriptors:
        grouped = by_name.get(descriptor.name)
        if not grouped:
            continue
        family = GaugeMetricFamily(descriptor.name, descriptor.documentation, labels=list(descriptor.labels))
        for sample in grouped:
            family.add_metric(list(sample.label_values), sample.value)
        families.append(family)
    return families


class RedfishCollector:
    """
    Collector for a single Redfish target.

    Implements the prometheus_client custom collector protocol
    (``describe`` and ``collect``) so it can be registered on a
    CollectorRegistry.
    """

    def __init__(
        self,
        connection: ConnectionResult,
        collectors: Sequence[SubCollectorFactory] = DEFAULT_COLLECTORS,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        """
        Initialize the collector.

        Args:
            connection: Bootstrap outcome for the target
            collectors: Sub-collector factories, called with (namespace, scrape_status)
            namespace: Metric namespace prefix

        Raises:
            DuplicateDescriptorError: If two descriptors share a metric name
            ValueError: If two sub-collectors share a name
        """
        self.connection = connection
        self.host = connection.host
        self.namespace = namespace

        self.up_descriptor = MetricDescriptor(build_fq_name(namespace, "", "up"), "redfish up")
        self.duration_descriptor = MetricDescriptor(
            build_fq_name(namespace, EXPORTER_SUBSYSTEM, "collector_duration_seconds"),
            "Collector time duration.",
            BASE_LABEL_NAMES,
        )
        self.scrape_status = Gauge(
            "collector_scrape_status",
            "collector_scrape_status",
            ["collector"],
            namespace=namespace,
            registry=None,
        )

        self.collectors: Dict[str, SubCollector] = {}
        for factory in collectors:
            collector = factory(namespace, self.scrape_status)
            if collector.name in self.collectors:
                raise ValueError(f"Sub-collector '{collector.name}' registered twice")
            self.collectors[collector.name] = collector

        self.descriptors: List[MetricDescriptor] = []
        for collector in self.collectors.values():
            self.descriptors.extend(collector.describe())

        scrape_status_descriptor = MetricDescriptor(
            build_fq_name(namespace, "", "collector_scrape_status"),
            "collector_scrape_status",
            ("collector",),
        )
        check_unique(
            [self.up_descriptor, self.duration_descriptor, scrape_status_descriptor] + self.descriptors
        )

    @classmethod
    def from_settings(cls, settings: Settings, host: Optional[str] = None) -> "RedfishCollector":
        """Bootstrap a connection to the target and build its collector."""
        connection = open_connection(settings, host)
        return cls(connection, namespace=settings.EXPORTER_NAMESPACE)

    @property
    def up(self) -> bool:
        return self.connection.up_value == 1.0

    def describe(self) -> Iterator[Metric]:
        yield GaugeMetricFamily(self.up_descriptor.name, self.up_descriptor.documentation)
        yield GaugeMetricFamily(
            self.duration_descriptor.name,
            self.duration_descriptor.documentation,
            labels=list(self.duration_descriptor.labels),
        )
        yield from self.scrape_status.describe()
        for descriptor in self.descriptors:
            yield GaugeMetricFamily(descriptor.name, descriptor.documentation, labels=list(descriptor.labels))

    def collect(self) -> Iterator[Metric]:
        scrape_time = time.perf_counter()

        up = self.connection.up_value
        yield to_metric_families([self.up_descriptor], [self.up_descriptor.sample(up)])[0]

        if up == 1.0:
            samples: List[LabeledSample] = []
            for name, collector in self.collectors.items():
                try:
                    samples.extend(collector.collect(self.connection.client))
                except Exception:
                    logger.exception(f"Collector {name} failed for {self.host}")
                    collector.mark_scrape(False)

            yield from to_metric_families(self.descriptors, samples)
            yield from self.scrape_status.collect()

        duration = time.perf_counter() - scrape_time
        yield to_metric_families(
            [self.duration_descriptor],
            [self.duration_descriptor.sample(duration, self.host)],
        )[0]

    def close(self) -> None:
        if self.connection.client is not None:
            self.connection.client.close()
