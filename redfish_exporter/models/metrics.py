"""
Metric Models - Descriptors and samples produced by the collectors.

A MetricDescriptor is the immutable identity of a gauge (name, help text and
label schema). A LabeledSample is one value emitted against a descriptor during
a single scrape. Descriptors are grouped per sub-collector in a
DescriptorRegistry that is built once from a static table.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Sequence, Tuple


class DuplicateDescriptorError(ValueError):
    """Raised when two descriptors resolve to the same fully qualified name."""
    pass


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join the non-empty parts of a metric name with underscores."""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class MetricDescriptor:
    name: str
    documentation: str
    labels: Tuple[str, ...] = ()

    def sample(self, value: float, *label_values: str) -> "LabeledSample":
        """
        Build a sample for this descriptor.

        Raises:
            ValueError: If the number of label values does not match the schema
        """
        if len(label_values) != len(self.labels):
            raise ValueError(
                f"{self.name}: expected {len(self.labels)} label values, got {len(label_values)}"
            )
        return LabeledSample(descriptor=self, value=float(value), label_values=tuple(label_values))


@dataclass(frozen=True)
class LabeledSample:
    descriptor: MetricDescriptor
    value: float
    label_values: Tuple[str, ...] = ()

    @property
    def labels(self) -> Dict[str, str]:
        return dict(zip(self.descriptor.labels, self.label_values))


# logical name -> (metric name, help text, label schema)
DescriptorTable = Mapping[str, Tuple[str, str, Sequence[str]]]


class DescriptorRegistry:
    """
    Fixed mapping from logical metric name to descriptor for one subsystem.

    Built once at construction and never mutated afterwards.
    """

    def __init__(self, namespace: str, subsystem: str, table: DescriptorTable):
        self.namespace = namespace
        self.subsystem = subsystem
        descriptors: Dict[str, MetricDescriptor] = {}
        seen: Dict[str, str] = {}

        for logical_name, (metric_name, help_text, labels) in table.items():
            fq_name = build_fq_name(namespace, subsystem, metric_name)
            if fq_name in seen:
                raise DuplicateDescriptorError(
                    f"'{logical_name}' and '{seen[fq_name]}' both resolve to {fq_name}"
                )
            seen[fq_name] = logical_name
            descriptors[logical_name] = MetricDescriptor(fq_name, help_text, tuple(labels))

        self._descriptors = descriptors

    def __getitem__(self, logical_name: str) -> MetricDescriptor:
        return self._descriptors[logical_name]

    def __iter__(self) -> Iterator[MetricDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def describe(self) -> Tuple[MetricDescriptor, ...]:
        return tuple(self._descriptors.values())


def check_unique(descriptors: Sequence[MetricDescriptor]) -> None:
    """
    Verify that no two descriptors share a fully qualified name.

    Raises:
        DuplicateDescriptorError: On the first collision found
    """
    seen = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise DuplicateDescriptorError(f"Duplicate metric descriptor: {descriptor.name}")
        seen.add(descriptor.name)
