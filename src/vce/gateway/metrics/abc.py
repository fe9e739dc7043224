"""Usage metrics sink abstraction."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from vce.artifacts.models import StringMetric


class MetricsCollector(ABC):
    """Abstract metrics sink for dependency injection."""

    @abstractmethod
    def track_string(self, metric: StringMetric, value: str) -> None:
        """Record a string-valued metric.

        Args:
            metric: Which metric is being recorded
            value: Value reported for the metric
        """
        ...


@dataclass(frozen=True)
class MetricsContext:
    """Whether metrics are collected for this process, and where they go.

    Passed explicitly to everything that reports metrics so that tests can
    substitute a fake collector.
    """

    enabled: bool
    collector: MetricsCollector
