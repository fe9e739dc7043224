"""Tests for harvesting metrics from the delegate's telemetry file."""

import json
import logging
from pathlib import Path

import pytest

from vce.artifacts.models import StringMetric, TelemetryRecord
from vce.artifacts.telemetry import track_telemetry
from vce.gateway.metrics.abc import MetricsContext
from vce.gateway.metrics.fake import FakeMetricsCollector


def _metrics() -> tuple[MetricsContext, FakeMetricsCollector]:
    collector = FakeMetricsCollector()
    return MetricsContext(enabled=True, collector=collector), collector


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "telemetry.txt"
    path.write_text(content, encoding="utf-8")
    return path


def test_both_fields_are_tracked(tmp_path: Path) -> None:
    metrics, collector = _metrics()
    path = _write(
        tmp_path,
        json.dumps({"acquired_artifacts": "cmake,ninja", "activated_artifacts": "cmake"}),
    )

    record = track_telemetry(path, metrics)

    assert record == TelemetryRecord(acquired_artifacts="cmake,ninja", activated_artifacts="cmake")
    assert collector.tracked == [
        (StringMetric.ACQUIRED_ARTIFACTS, "cmake,ninja"),
        (StringMetric.ACTIVATED_ARTIFACTS, "cmake"),
    ]


def test_only_activated_field_is_tracked(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    metrics, collector = _metrics()
    path = _write(tmp_path, json.dumps({"activated_artifacts": "ninja"}))

    with caplog.at_level(logging.DEBUG, logger="vce.artifacts.telemetry"):
        record = track_telemetry(path, metrics)

    assert record == TelemetryRecord(acquired_artifacts=None, activated_artifacts="ninja")
    assert collector.tracked == [(StringMetric.ACTIVATED_ARTIFACTS, "ninja")]
    assert "No artifacts acquired." in caplog.messages


def test_non_string_field_is_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    metrics, collector = _metrics()
    path = _write(
        tmp_path, json.dumps({"acquired_artifacts": ["cmake"], "activated_artifacts": "cmake"})
    )

    with caplog.at_level(logging.DEBUG, logger="vce.artifacts.telemetry"):
        record = track_telemetry(path, metrics)

    assert record.acquired_artifacts is None
    assert collector.tracked == [(StringMetric.ACTIVATED_ARTIFACTS, "cmake")]
    assert "Acquired artifacts was not a string." in caplog.messages


def test_empty_object_tracks_nothing(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    metrics, collector = _metrics()
    path = _write(tmp_path, "{}")

    with caplog.at_level(logging.DEBUG, logger="vce.artifacts.telemetry"):
        record = track_telemetry(path, metrics)

    assert record == TelemetryRecord(acquired_artifacts=None, activated_artifacts=None)
    assert collector.tracked == []
    assert "No artifacts activated." in caplog.messages


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        "",
        '{"acquired_artifacts": "a", "n": 1' + "0" * 5000 + "}",
        "[" * 100000 + "]" * 100000,
    ],
    ids=["garbage", "array", "empty", "huge-integer", "deep-nesting"],
)
def test_unparsable_file_tracks_nothing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str
) -> None:
    metrics, collector = _metrics()
    path = _write(tmp_path, content)

    with caplog.at_level(logging.DEBUG, logger="vce.artifacts.telemetry"):
        record = track_telemetry(path, metrics)

    assert record == TelemetryRecord(acquired_artifacts=None, activated_artifacts=None)
    assert collector.tracked == []
    assert any("couldn't be parsed" in message for message in caplog.messages)


def test_missing_file_tracks_nothing(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    metrics, collector = _metrics()

    with caplog.at_level(logging.DEBUG, logger="vce.artifacts.telemetry"):
        record = track_telemetry(tmp_path / "absent.txt", metrics)

    assert record.acquired_artifacts is None
    assert collector.tracked == []
    assert any("couldn't be read" in message for message in caplog.messages)
