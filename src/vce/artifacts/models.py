"""Data models for artifacts provisioning and delegation."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

# Files inside the installed vcpkg-artifacts directory
ENTRY_POINT_NAME = "main.js"
VERSION_MARKER_NAME = "version.txt"
DEVELOPMENT_SENTINEL_NAME = "artifacts-development.txt"

# Subtree of the standalone bundle that becomes the install directory
BUNDLE_ARTIFACTS_SUBDIR = "vcpkg-artifacts"


class InstallationState(Enum):
    """Whether the local artifacts install can be used as-is."""

    MISSING = "missing"
    CURRENT = "current"
    STALE = "stale"


InstallationReason = Literal[
    "not-installed",
    "no-marker",
    "version-mismatch",
    "development-sentinel-missing",
    "up-to-date",
]


@dataclass(frozen=True)
class InstallationCheck:
    """Result of checking the local artifacts install against the running release."""

    state: InstallationState
    reason: InstallationReason
    current_version: str | None
    # Content of version.txt, if one was read
    installed_version: str | None

    @property
    def needs_provisioning(self) -> bool:
        return self.state is not InstallationState.CURRENT


@dataclass(frozen=True)
class BundleRelease:
    """The standalone bundle release this tool is pinned to.

    A release without a version is a development build: it always tracks the
    latest published bundle and is considered current only while the
    development sentinel file is present.
    """

    version: str | None
    sha512: str | None

    @property
    def is_version_stamped(self) -> bool:
        return self.version is not None


@dataclass(frozen=True)
class BundleArtifact:
    """A downloaded standalone bundle archive."""

    uri: str
    path: Path
    sha512: str | None


@dataclass(frozen=True)
class SwitchGroup:
    """Mutually-exclusive switches; at most one member may be given."""

    name: str
    members: tuple[str, ...]
    error_message: str

    def count_present(self, switches: tuple[str, ...]) -> int:
        return sum(1 for member in self.members if member in switches)


@dataclass(frozen=True)
class ParsedArguments:
    """Switches and settings parsed from the command line.

    Switches keep the order in which they were parsed. Settings map a setting
    name to its value, also in parse order.
    """

    switches: tuple[str, ...] = ()
    settings: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(set(self.switches)) != len(self.switches):
            msg = f"Duplicate switch names in {list(self.switches)}"
            raise ValueError(msg)


@dataclass(frozen=True)
class DelegateInvocation:
    """A fully-built command line for the artifacts delegate process."""

    executable: Path
    arguments: tuple[str, ...]
    working_directory: Path
    telemetry_file: Path | None
    # Staged copy of the localized messages, removed after the run
    language_file: Path | None

    @property
    def command_line(self) -> list[str]:
        return [str(self.executable), *self.arguments]


class StringMetric(Enum):
    """String-valued usage metrics reported by the artifacts delegate."""

    ACQUIRED_ARTIFACTS = "acquired_artifacts"
    ACTIVATED_ARTIFACTS = "activated_artifacts"


@dataclass(frozen=True)
class TelemetryRecord:
    """Fields harvested from the delegate's telemetry file."""

    acquired_artifacts: str | None
    activated_artifacts: str | None
