"""Real ArchiveExtractor implementation using tarfile and zipfile."""

import logging
import tarfile
import zipfile
from pathlib import Path

from vce.artifacts.errors import ExtractionError
from vce.gateway.archive.abc import ArchiveExtractor

logger = logging.getLogger(__name__)


class RealArchiveExtractor(ArchiveExtractor):
    """Production implementation for tarballs and zip files.

    Tar members are extracted with the "data" filter, which rejects absolute
    paths, links escaping the destination, and device files.
    """

    def extract(self, archive: Path, destination: Path) -> None:
        logger.debug("Extracting %s to %s", archive, destination)
        try:
            if zipfile.is_zipfile(archive):
                self._extract_zip(archive, destination)
                return
            with tarfile.open(archive, "r:*") as tar:
                tar.extractall(destination, filter="data")
        except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
            raise ExtractionError(f"Failed to extract {archive}: {e}") from e

    def _extract_zip(self, archive: Path, destination: Path) -> None:
        root = destination.resolve()
        with zipfile.ZipFile(archive) as zf:
            for name in zf.namelist():
                target = (root / name).resolve()
                if not target.is_relative_to(root):
                    raise ExtractionError(f"Refusing to extract {name} outside {destination}")
            zf.extractall(destination)
