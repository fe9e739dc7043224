"""Fake BundleDownloader implementation for testing.

FakeBundleDownloader serves pre-configured bytes per URI, enabling
provisioning tests without network access.
"""

from dataclasses import dataclass
from pathlib import Path

from vce.artifacts.errors import DownloadError
from vce.gateway.downloader.abc import BundleDownloader


@dataclass(frozen=True)
class DownloadCall:
    """Record of a download call for test assertions."""

    uri: str
    destination: Path
    sha512: str | None


class FakeBundleDownloader(BundleDownloader):
    """In-memory fake that writes configured content to the destination.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        content_by_uri: dict[str, bytes] | None = None,
        download_error: str | None = None,
    ) -> None:
        """Create FakeBundleDownloader.

        Args:
            content_by_uri: Bytes to write for each URI. Unknown URIs raise DownloadError.
            download_error: If set, every download raises DownloadError with this message.
        """
        self._content_by_uri = content_by_uri if content_by_uri is not None else {}
        self._download_error = download_error
        self._calls: list[DownloadCall] = []

    @property
    def calls(self) -> list[DownloadCall]:
        """Get the list of download calls that were made.

        Returns a copy of the list to prevent external mutation.

        This property is for test assertions only.
        """
        return list(self._calls)

    def download(self, uri: str, destination: Path, *, sha512: str | None) -> None:
        self._calls.append(DownloadCall(uri=uri, destination=destination, sha512=sha512))
        if self._download_error is not None:
            raise DownloadError(self._download_error)
        if uri not in self._content_by_uri:
            raise DownloadError(f"Failed to download {uri}: 404 Not Found")
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self._content_by_uri[uri])
