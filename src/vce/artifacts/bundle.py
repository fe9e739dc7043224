"""Download and install the vcpkg standalone bundle's artifacts directory.

The bundle is extracted next to the install directory and only its
vcpkg-artifacts subtree is renamed into place. Extracting over the live
install would expose a half-populated directory, and extracting the whole
bundle over the vcpkg root would overwrite scripts and triplets.

The remove-then-rename sequence is not locked. Two processes provisioning the
same root can still race; process-unique temp names only keep their partial
extractions apart.
"""

import logging
import shutil
import time
from pathlib import Path

from vce.artifacts.errors import (
    ArtifactsNotInstalledError,
    BootstrapError,
    DownloadError,
    ExtractionError,
    ProvisioningError,
)
from vce.artifacts.models import (
    BUNDLE_ARTIFACTS_SUBDIR,
    ENTRY_POINT_NAME,
    VERSION_MARKER_NAME,
    BundleArtifact,
    BundleRelease,
)
from vce.artifacts.staleness import check_installation
from vce.core.output import user_output, user_warning
from vce.gateway.archive.abc import ArchiveExtractor
from vce.gateway.downloader.abc import BundleDownloader
from vce.gateway.unique_names.abc import UniqueNames

logger = logging.getLogger(__name__)

RELEASES_URL = "https://github.com/microsoft/vcpkg-tool/releases"
BUNDLE_ASSET_NAME = "vcpkg-standalone-bundle.tar.gz"
LATEST_TARBALL_NAME = "vcpkg-standalone-bundle-latest.tar.gz"

RENAME_ATTEMPTS = 5
RENAME_RETRY_DELAY_SECONDS = 0.2


def bundle_tarball_name(release: BundleRelease) -> str:
    """File name the bundle is downloaded to inside the downloads directory."""
    if release.version is None:
        return LATEST_TARBALL_NAME
    return f"vcpkg-standalone-bundle-{release.version}.tar.gz"


def bundle_uri(release: BundleRelease) -> str:
    """Download URL of the standalone bundle for release."""
    if release.version is None:
        return f"{RELEASES_URL}/latest/download/{BUNDLE_ASSET_NAME}"
    return f"{RELEASES_URL}/download/{release.version}/{BUNDLE_ASSET_NAME}"


def download_standalone_bundle(
    downloader: BundleDownloader, release: BundleRelease, downloads_dir: Path
) -> BundleArtifact:
    """Download the standalone bundle for release into downloads_dir.

    Version-stamped releases are verified against their SHA-512. Development
    releases always fetch the latest bundle, so a previously downloaded
    "latest" tarball is deleted first.

    Raises:
        DownloadError: If the stale tarball can't be removed or the download fails
    """
    artifact = BundleArtifact(
        uri=bundle_uri(release),
        path=downloads_dir / bundle_tarball_name(release),
        sha512=release.sha512,
    )

    if release.version is None:
        user_warning("Downloading latest vcpkg-standalone-bundle.")
        try:
            artifact.path.unlink(missing_ok=True)
        except OSError as e:
            raise DownloadError(f"Failed to remove {artifact.path}: {e}") from e
    else:
        user_output(f"Downloading vcpkg-standalone-bundle {release.version}...")

    downloader.download(artifact.uri, artifact.path, sha512=artifact.sha512)
    return artifact


def extract_archive_to_temp_subdirectory(
    extractor: ArchiveExtractor,
    unique_names: UniqueNames,
    archive: Path,
    to_path: Path,
) -> Path:
    """Extract archive into a fresh sibling directory of to_path.

    The directory is named "<to_path>.partial.<unique>" so concurrent
    provisioners never share it, and it lives on the same filesystem as
    to_path so that a rename out of it does not copy.

    Returns:
        Path to the temporary directory holding the extracted archive

    Raises:
        ExtractionError: If the temporary directory can't be created or extraction
            fails; a directory that was created is removed
    """
    temp_dir = to_path.with_name(f"{to_path.name}.partial.{unique_names.generate()}")
    try:
        if temp_dir.exists():
            shutil.rmtree(temp_dir)
        temp_dir.mkdir(parents=True)
    except OSError as e:
        raise ExtractionError(f"Failed to create {temp_dir}: {e}") from e

    try:
        extractor.extract(archive, temp_dir)
    except ExtractionError:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise
    return temp_dir


def _rename_with_retry(source: Path, target: Path) -> None:
    """Rename source to target, retrying transient failures.

    Virus scanners and indexers on some platforms briefly hold handles to
    freshly extracted files, which makes the first rename attempts fail.
    """
    for attempt in range(1, RENAME_ATTEMPTS + 1):
        try:
            source.rename(target)
            return
        except OSError as e:
            if attempt == RENAME_ATTEMPTS:
                raise ProvisioningError(f"Failed to rename {source} to {target}: {e}") from e
            logger.debug("Rename attempt %d of %s failed: %s", attempt, source, e)
            time.sleep(RENAME_RETRY_DELAY_SECONDS * attempt)


def _remove_best_effort(path: Path) -> None:
    try:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not clean up %s: %s", path, e)


def provision_artifacts(
    *,
    downloader: BundleDownloader,
    extractor: ArchiveExtractor,
    unique_names: UniqueNames,
    release: BundleRelease,
    install_dir: Path,
    downloads_dir: Path,
) -> None:
    """Replace install_dir with a fresh copy from the standalone bundle.

    Failures before the old install is removed leave it untouched. Once the
    new tree has been renamed into place, failing to clean up the temporary
    directory or the archive is only logged.

    Raises:
        DownloadError: If the bundle could not be downloaded
        ExtractionError: If the bundle could not be extracted or lacks vcpkg-artifacts
        ProvisioningError: If the old install could not be removed or the new one renamed
    """
    artifact = download_standalone_bundle(downloader, release, downloads_dir)

    try:
        temp_dir = extract_archive_to_temp_subdirectory(
            extractor, unique_names, artifact.path, install_dir
        )
    except ExtractionError:
        _remove_best_effort(artifact.path)
        raise

    extracted = temp_dir / BUNDLE_ARTIFACTS_SUBDIR
    if not extracted.is_dir():
        _remove_best_effort(temp_dir)
        _remove_best_effort(artifact.path)
        raise ExtractionError(f"{artifact.path} does not contain {BUNDLE_ARTIFACTS_SUBDIR}/")

    if install_dir.exists():
        try:
            shutil.rmtree(install_dir)
        except OSError as e:
            _remove_best_effort(temp_dir)
            _remove_best_effort(artifact.path)
            raise ProvisioningError(f"Failed to remove {install_dir}: {e}") from e

    _rename_with_retry(extracted, install_dir)
    logger.debug("Installed vcpkg-artifacts to %s", install_dir)

    _remove_best_effort(temp_dir)
    _remove_best_effort(artifact.path)

    if release.version is not None:
        marker = install_dir / VERSION_MARKER_NAME
        try:
            marker.write_text(release.version, encoding="utf-8")
        except OSError as e:
            raise ProvisioningError(f"Failed to write {marker}: {e}") from e


def ensure_artifacts_installed(
    *,
    downloader: BundleDownloader,
    extractor: ArchiveExtractor,
    unique_names: UniqueNames,
    release: BundleRelease,
    install_dir: Path,
    downloads_dir: Path,
    can_provision: bool,
) -> Path:
    """Make sure a usable vcpkg-artifacts install exists and return its entry point.

    When provisioning is allowed, a missing or stale install is replaced.
    Otherwise whatever is installed is used as-is, and an absent install
    directory is an error.

    Raises:
        ArtifactsNotInstalledError: If provisioning is not allowed and nothing is installed
        ProvisioningError: If provisioning fails or leaves no entry point
    """
    entry_point = install_dir / ENTRY_POINT_NAME

    if not can_provision:
        if not install_dir.exists():
            raise ArtifactsNotInstalledError(install_dir)
        return entry_point

    check = check_installation(install_dir, release)
    logger.debug("vcpkg-artifacts at %s is %s (%s)", install_dir, check.state.value, check.reason)
    if check.needs_provisioning:
        provision_artifacts(
            downloader=downloader,
            extractor=extractor,
            unique_names=unique_names,
            release=release,
            install_dir=install_dir,
            downloads_dir=downloads_dir,
        )

    if not entry_point.exists():
        raise BootstrapError(entry_point)
    return entry_point
