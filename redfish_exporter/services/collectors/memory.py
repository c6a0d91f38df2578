"""
Memory Collector - DIMM status and capacity per computer system.
"""

from typing import List, Tuple

from prometheus_client import Gauge

from redfish_exporter.models.metrics import DescriptorRegistry, LabeledSample, MetricDescriptor
from redfish_exporter.services.collectors.base import SubCollector
from redfish_exporter.services.redfish import RedfishClient, RedfishException
from redfish_exporter.utils.state_mapping import (
    HEALTH_VALUES,
    STATE_VALUES,
    describe_table,
    map_health,
    map_state,
)

MEMORY_SUBSYSTEM = "memory"
MEMORY_LABEL_NAMES = ("system_id", "memory_id", "name", "type")

MEMORY_METRICS = {
    "memory_state": (
        "state",
        f"memory state,{describe_table(STATE_VALUES)}",
        MEMORY_LABEL_NAMES,
    ),
    "memory_health_state": (
        "health_state",
        f"memory health,{describe_table(HEALTH_VALUES)}",
        MEMORY_LABEL_NAMES,
    ),
    "memory_capacity_mib": (
        "capacity_mib",
        "memory capacity in MiB",
        MEMORY_LABEL_NAMES,
    ),
}


class MemoryCollector(SubCollector):
    """Collector for memory modules of every Redfish computer system."""

    name = "memory"

    def __init__(self, namespace: str, scrape_status: Gauge):
        super().__init__(namespace, scrape_status)
        self.metrics = DescriptorRegistry(namespace, MEMORY_SUBSYSTEM, MEMORY_METRICS)

    def describe(self) -> Tuple[MetricDescriptor, ...]:
        return self.metrics.describe()

    def collect(self, client: RedfishClient) -> List[LabeledSample]:
        samples: List[LabeledSample] = []

        try:
            systems = client.get_systems()
        except RedfishException as e:
            self.logger.warning(f"Errors getting systems from service: {e}")
            self.mark_scrape(False)
            return samples

        for system in systems:
            try:
                modules = client.get_memory(system)
            except RedfishException as e:
                self.logger.warning(f"Errors getting memory from system {system.id}: {e}")
                continue

            for module in modules:
                label_values = (system.id, module.id, module.name, module.memory_device_type)

                state, ok = map_state(module.status.state)
                if ok:
                    samples.append(self.metrics["memory_state"].sample(state, *label_values))

                health, ok = map_health(module.status.health)
                if ok:
                    samples.append(self.metrics["memory_health_state"].sample(health, *label_values))

                if module.capacity_mib is not None:
                    samples.append(self.metrics["memory_capacity_mib"].sample(module.capacity_mib, *label_values))

        self.mark_scrape(True)
        return samples
