"""
Manager Collector - BMC manager status and log service entry counts.

Exposed metrics (namespace ``redfish``):
- redfish_manager_state: Status.State mapped to 1..11
- redfish_manager_health_state: Status.Health mapped to 1..3
- redfish_manager_power_state: PowerState mapped to 1..4
- redfish_logservices_entry_count: entries per log service and severity
"""

from typing import List, Tuple

from prometheus_client import Gauge

from redfish_exporter.models.metrics import DescriptorRegistry, LabeledSample, MetricDescriptor
from redfish_exporter.services.collectors.base import SubCollector
from redfish_exporter.services.collectors.logservice import LogServiceTraversal
from redfish_exporter.services.redfish import RedfishClient, RedfishException
from redfish_exporter.utils.state_mapping import (
    HEALTH_VALUES,
    POWER_STATE_VALUES,
    STATE_VALUES,
    describe_table,
    map_health,
    map_power_state,
    map_state,
)

MANAGER_SUBSYSTEM = "manager"
MANAGER_LABEL_NAMES = ("manager_id", "name", "model", "type")

MANAGER_METRICS = {
    "manager_state": (
        "state",
        f"manager state,{describe_table(STATE_VALUES)}",
        MANAGER_LABEL_NAMES,
    ),
    "manager_health_state": (
        "health_state",
        f"manager health,{describe_table(HEALTH_VALUES)}",
        MANAGER_LABEL_NAMES,
    ),
    "manager_power_state": (
        "power_state",
        f"manager power state,{describe_table(POWER_STATE_VALUES)}",
        MANAGER_LABEL_NAMES,
    ),
}


class ManagerCollector(SubCollector):
    """Collector for Redfish managers (BMCs) and their log services."""

    name = "manager"

    def __init__(self, namespace: str, scrape_status: Gauge):
        super().__init__(namespace, scrape_status)
        self.metrics = DescriptorRegistry(namespace, MANAGER_SUBSYSTEM, MANAGER_METRICS)
        self.log_services = LogServiceTraversal(namespace)

    def describe(self) -> Tuple[MetricDescriptor, ...]:
        return self.metrics.describe() + self.log_services.describe()

    def collect(self, client: RedfishClient) -> List[LabeledSample]:
        samples: List[LabeledSample] = []

        try:
            managers = client.get_managers()
        except RedfishException as e:
            self.logger.warning(f"Errors getting managers from service: {e}")
            self.mark_scrape(False)
            return samples

        for manager in managers:
            label_values = (manager.id, manager.name, manager.model, manager.manager_type)

            health, ok = map_health(manager.status.health)
            if ok:
                samples.append(self.metrics["manager_health_state"].sample(health, *label_values))

            state, ok = map_state(manager.status.state)
            if ok:
                samples.append(self.metrics["manager_state"].sample(state, *label_values))

            power_state, ok = map_power_state(manager.power_state)
            if ok:
                samples.append(self.metrics["manager_power_state"].sample(power_state, *label_values))

            samples.extend(self.log_services.collect(client, manager))

        self.logger.debug(f"Collected {len(samples)} samples from {len(managers)} managers")
        self.mark_scrape(True)
        return samples
