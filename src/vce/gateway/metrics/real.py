"""Real MetricsCollector implementation appending JSON lines to a file."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from vce.artifacts.models import StringMetric
from vce.gateway.metrics.abc import MetricsCollector

logger = logging.getLogger(__name__)


class RealMetricsCollector(MetricsCollector):
    """Production implementation that appends one JSON object per metric.

    Metrics are local usage records. A failure to write them is logged and
    otherwise ignored.
    """

    def __init__(self, metrics_path: Path) -> None:
        self._metrics_path = metrics_path

    def track_string(self, metric: StringMetric, value: str) -> None:
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "metric": metric.value,
            "value": value,
        }
        try:
            self._metrics_path.parent.mkdir(parents=True, exist_ok=True)
            with self._metrics_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError as e:
            logger.debug("Could not record metric %s: %s", metric.value, e)
