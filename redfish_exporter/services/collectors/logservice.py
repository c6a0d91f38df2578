"""
Log Service Traversal - Child step that counts log entries by severity.

Any parent collector whose resources expose a LogServices collection
(managers, computer systems) runs this step per resource. Entries are grouped
by severity, so the number of series depends on the severity domain and not on
log volume.
"""

from collections import Counter
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar, Union
import logging

from redfish_exporter.models.metrics import DescriptorRegistry, LabeledSample, MetricDescriptor
from redfish_exporter.models.redfish import ComputerSystem, Manager
from redfish_exporter.services.redfish import RedfishClient, RedfishException

logger = logging.getLogger(__name__)

LOGSERVICE_SUBSYSTEM = "logservices"
LOGSERVICE_LABEL_NAMES = ("name", "severity")

LOGSERVICE_METRICS = {
    "entry_count": ("entry_count", "Number of log messages", LOGSERVICE_LABEL_NAMES),
}

T = TypeVar("T")


def count_by(items: Iterable[T], key: Callable[[T], str]) -> Dict[str, int]:
    """Count items per enumerated key."""
    return dict(Counter(key(item) for item in items))


class LogServiceTraversal:
    """Composable log-service traversal for a parent resource."""

    def __init__(self, namespace: str):
        self.metrics = DescriptorRegistry(namespace, LOGSERVICE_SUBSYSTEM, LOGSERVICE_METRICS)

    def describe(self) -> Tuple[MetricDescriptor, ...]:
        return self.metrics.describe()

    def collect(self, client: RedfishClient, parent: Union[Manager, ComputerSystem]) -> List[LabeledSample]:
        """
        Count entries per (log service, severity) for one parent resource.

        Failures are logged and skipped: a parent whose log services cannot be
        listed yields nothing, and a log service whose entries cannot be read
        is skipped while its siblings are still counted.
        """
        samples: List[LabeledSample] = []

        try:
            log_services = client.get_log_services(parent)
        except RedfishException as e:
            logger.warning(f"Errors getting LogServices from {parent.id or parent.name}: {e}")
            return samples

        descriptor = self.metrics["entry_count"]
        for log_service in log_services:
            try:
                entries = client.get_log_entries(log_service)
            except RedfishException as e:
                logger.warning(f"Errors getting LogEntries from LogService {log_service.name}: {e}")
                continue

            for severity, count in count_by(entries, lambda entry: entry.severity).items():
                samples.append(descriptor.sample(count, log_service.name, severity))

        return samples
