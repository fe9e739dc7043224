"""Exceptions raised while provisioning or delegating to vcpkg-artifacts."""

from pathlib import Path

from vce.artifacts.models import SwitchGroup


class ArtifactsError(Exception):
    """Base class for failures the CLI reports to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ArtifactsNotInstalledError(ArtifactsError):
    """Artifacts are not installed and this vcpkg root does not allow provisioning."""

    def __init__(self, install_dir: Path) -> None:
        super().__init__(
            f"vcpkg-artifacts is not installed at {install_dir}, and it can't be installed "
            "because the vcpkg root is assumed to be read-only. Reinstalling vcpkg using "
            "the 'one liner' may fix this problem."
        )
        self.install_dir = install_dir


class ProvisioningError(ArtifactsError):
    """Installing a fresh copy of vcpkg-artifacts failed."""


class DownloadError(ProvisioningError):
    """The standalone bundle could not be downloaded or failed verification."""


class ExtractionError(ProvisioningError):
    """The standalone bundle could not be extracted."""


class BootstrapError(ProvisioningError):
    """The install completed but the entry point is missing."""

    def __init__(self, entry_point: Path) -> None:
        super().__init__(
            f"Bootstrapping vcpkg-artifacts failed: {entry_point} does not exist."
        )
        self.entry_point = entry_point


class SwitchConflictError(ArtifactsError):
    """More than one switch from a mutually-exclusive group was given."""

    def __init__(self, group: SwitchGroup) -> None:
        super().__init__(group.error_message)
        self.group = group


class DelegateLaunchError(ArtifactsError):
    """The artifacts delegate process could not be started."""


class ConfigError(ArtifactsError):
    """A configuration file could not be read or has an invalid value."""
