"""Fake MetricsCollector implementation for testing."""

from vce.artifacts.models import StringMetric
from vce.gateway.metrics.abc import MetricsCollector


class FakeMetricsCollector(MetricsCollector):
    """In-memory fake that records every tracked metric."""

    def __init__(self) -> None:
        self._tracked: list[tuple[StringMetric, str]] = []

    @property
    def tracked(self) -> list[tuple[StringMetric, str]]:
        """Get (metric, value) pairs in the order they were tracked.

        This property is for test assertions only.
        """
        return list(self._tracked)

    def track_string(self, metric: StringMetric, value: str) -> None:
        self._tracked.append((metric, value))
