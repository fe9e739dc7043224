"""Archive extraction abstraction."""

from abc import ABC, abstractmethod
from pathlib import Path


class ArchiveExtractor(ABC):
    """Abstract archive extractor for dependency injection."""

    @abstractmethod
    def extract(self, archive: Path, destination: Path) -> None:
        """Extract every member of archive below destination.

        Args:
            archive: Path to a .tar.gz, .tgz, .tar or .zip file
            destination: Existing, empty directory to extract into

        Raises:
            ExtractionError: If the archive is unreadable, unsupported, or unsafe
        """
        ...
