"""Fake ArchiveExtractor implementation for testing.

FakeArchiveExtractor materializes a configured file tree instead of reading
the archive, so provisioning tests can run on arbitrary placeholder bytes.
"""

from pathlib import Path

from vce.artifacts.errors import ExtractionError
from vce.gateway.archive.abc import ArchiveExtractor


class FakeArchiveExtractor(ArchiveExtractor):
    """In-memory fake that writes configured files below the destination.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        files: dict[str, str] | None = None,
        extraction_error: str | None = None,
    ) -> None:
        """Create FakeArchiveExtractor.

        Args:
            files: Relative path -> text content written on every extract call
            extraction_error: If set, extract raises ExtractionError with this message
                after creating the files, simulating a half-finished extraction.
        """
        self._files = files if files is not None else {}
        self._extraction_error = extraction_error
        self._extractions: list[tuple[Path, Path]] = []

    @property
    def extractions(self) -> list[tuple[Path, Path]]:
        """Get (archive, destination) pairs that were extracted.

        This property is for test assertions only.
        """
        return list(self._extractions)

    def extract(self, archive: Path, destination: Path) -> None:
        self._extractions.append((archive, destination))
        for relative, content in self._files.items():
            target = destination / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        if self._extraction_error is not None:
            raise ExtractionError(self._extraction_error)
