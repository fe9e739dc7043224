"""Harvest usage metrics from the telemetry file written by vcpkg-artifacts.

Everything here is best-effort: any problem with the file is logged at debug
level and the run continues with its exit code unaffected.
"""

import json
import logging
from pathlib import Path

from vce.artifacts.models import StringMetric, TelemetryRecord
from vce.gateway.metrics.abc import MetricsContext

logger = logging.getLogger(__name__)


def _track_field(
    parsed: dict[str, object],
    metric: StringMetric,
    metrics: MetricsContext,
    *,
    not_string_message: str,
    absent_message: str,
) -> str | None:
    if metric.value not in parsed:
        logger.debug(absent_message)
        return None

    value = parsed[metric.value]
    if not isinstance(value, str):
        logger.debug(not_string_message)
        return None

    metrics.collector.track_string(metric, value)
    return value


def track_telemetry(telemetry_file: Path, metrics: MetricsContext) -> TelemetryRecord:
    """Read telemetry_file and forward its known string fields to the metrics sink.

    The acquired and activated artifact fields are handled independently;
    either may be absent.

    Returns:
        The fields that were recorded. Never raises.
    """
    empty = TelemetryRecord(acquired_artifacts=None, activated_artifacts=None)

    try:
        content = telemetry_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Telemetry file couldn't be read: %s", e)
        return empty

    try:
        parsed = json.loads(content)
    except (ValueError, RecursionError) as e:
        logger.debug("Telemetry file couldn't be parsed: %s", e)
        return empty

    if not isinstance(parsed, dict):
        logger.debug("Telemetry file couldn't be parsed: expected a JSON object")
        return empty

    acquired = _track_field(
        parsed,
        StringMetric.ACQUIRED_ARTIFACTS,
        metrics,
        not_string_message="Acquired artifacts was not a string.",
        absent_message="No artifacts acquired.",
    )
    activated = _track_field(
        parsed,
        StringMetric.ACTIVATED_ARTIFACTS,
        metrics,
        not_string_message="Activated artifacts was not a string.",
        absent_message="No artifacts activated.",
    )
    return TelemetryRecord(acquired_artifacts=acquired, activated_artifacts=activated)
