"""Real BundleDownloader implementation using urllib."""

import hashlib
import http.client
import logging
import urllib.error
import urllib.request
from pathlib import Path

from vce.artifacts.errors import DownloadError
from vce.gateway.downloader.abc import BundleDownloader

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
DOWNLOAD_TIMEOUT_SECONDS = 300


class RealBundleDownloader(BundleDownloader):
    """Production implementation that streams the response to a partial file.

    The content is written to "<destination>.part" and only renamed into place
    after the hash check, so an interrupted download never leaves a file at
    the destination.
    """

    def download(self, uri: str, destination: Path, *, sha512: str | None) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")
        hasher = hashlib.sha512()

        logger.debug("Downloading %s to %s", uri, destination)
        try:
            with urllib.request.urlopen(uri, timeout=DOWNLOAD_TIMEOUT_SECONDS) as response:
                with partial.open("wb") as f:
                    while chunk := response.read(CHUNK_SIZE):
                        hasher.update(chunk)
                        f.write(chunk)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {uri}: {e}") from e

        if sha512 is not None:
            actual = hasher.hexdigest()
            if actual != sha512.lower():
                partial.unlink(missing_ok=True)
                raise DownloadError(
                    f"File does not have the expected hash: {uri}\n"
                    f"  Expected: {sha512.lower()}\n"
                    f"  Actual:   {actual}"
                )

        try:
            partial.replace(destination)
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Failed to move download into place at {destination}: {e}") from e
