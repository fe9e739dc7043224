"""Check whether the installed vcpkg-artifacts matches the running release."""

from pathlib import Path

from vce.artifacts.models import (
    DEVELOPMENT_SENTINEL_NAME,
    VERSION_MARKER_NAME,
    BundleRelease,
    InstallationCheck,
    InstallationState,
)


def read_installed_version(install_dir: Path) -> str | None:
    """Read version.txt from the install directory.

    Returns None if the file does not exist.
    """
    marker = install_dir / VERSION_MARKER_NAME
    if not marker.is_file():
        return None
    # Undecodable bytes are replaced so a corrupt marker compares unequal
    return marker.read_bytes().decode("utf-8", errors="replace").strip()


def check_installation(install_dir: Path, release: BundleRelease) -> InstallationCheck:
    """Decide whether install_dir is missing, stale or current for release.

    Version-stamped releases compare version.txt against the release version.
    Development releases are current only while the development sentinel
    file exists. Nothing is written.
    """
    if not install_dir.is_dir():
        return InstallationCheck(
            state=InstallationState.MISSING,
            reason="not-installed",
            current_version=release.version,
            installed_version=None,
        )

    installed_version = read_installed_version(install_dir)

    if release.version is None:
        if (install_dir / DEVELOPMENT_SENTINEL_NAME).exists():
            return InstallationCheck(
                state=InstallationState.CURRENT,
                reason="up-to-date",
                current_version=None,
                installed_version=installed_version,
            )
        return InstallationCheck(
            state=InstallationState.STALE,
            reason="development-sentinel-missing",
            current_version=None,
            installed_version=installed_version,
        )

    if installed_version is None:
        return InstallationCheck(
            state=InstallationState.STALE,
            reason="no-marker",
            current_version=release.version,
            installed_version=None,
        )

    if installed_version != release.version:
        return InstallationCheck(
            state=InstallationState.STALE,
            reason="version-mismatch",
            current_version=release.version,
            installed_version=installed_version,
        )

    return InstallationCheck(
        state=InstallationState.CURRENT,
        reason="up-to-date",
        current_version=release.version,
        installed_version=installed_version,
    )
