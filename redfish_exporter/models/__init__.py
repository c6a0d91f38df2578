from redfish_exporter.models.metrics import (
    DescriptorRegistry,
    DuplicateDescriptorError,
    LabeledSample,
    MetricDescriptor,
    build_fq_name,
    check_unique,
)
from redfish_exporter.models.redfish import (
    ComputerSystem,
    LogEntry,
    LogService,
    Manager,
    MemoryModule,
    ResourceCollection,
    Status,
)

__all__ = [
    "DescriptorRegistry",
    "DuplicateDescriptorError",
    "LabeledSample",
    "MetricDescriptor",
    "build_fq_name",
    "check_unique",
    "ComputerSystem",
    "LogEntry",
    "LogService",
    "Manager",
    "MemoryModule",
    "ResourceCollection",
    "Status",
]
