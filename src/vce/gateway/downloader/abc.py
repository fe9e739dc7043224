"""Bundle download abstraction.

This module provides an ABC for fetching a remote archive to a local path,
enabling provisioning tests that never touch the network.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class BundleDownloader(ABC):
    """Abstract downloader for dependency injection."""

    @abstractmethod
    def download(self, uri: str, destination: Path, *, sha512: str | None) -> None:
        """Download uri to destination.

        The destination only appears once the download completed and, when a
        hash is given, matched it.

        Args:
            uri: URL to fetch
            destination: Local file path to create
            sha512: Expected lowercase hex SHA-512 of the content, or None to skip verification

        Raises:
            DownloadError: If the download fails or the hash does not match
        """
        ...
