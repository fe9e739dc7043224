"""Tests for RealArchiveExtractor."""

import io
import tarfile
import zipfile
from pathlib import Path

import pytest

from tests.test_utils.context_builders import make_tarball
from vce.artifacts.errors import ExtractionError
from vce.gateway.archive.real import RealArchiveExtractor


def test_extracts_tarball(tmp_path: Path) -> None:
    archive = tmp_path / "bundle.tar.gz"
    archive.write_bytes(make_tarball({"vcpkg-artifacts/main.js": "// main\n"}))
    destination = tmp_path / "out"
    destination.mkdir()

    RealArchiveExtractor().extract(archive, destination)

    assert (destination / "vcpkg-artifacts" / "main.js").read_text(encoding="utf-8") == "// main\n"


def test_extracts_zip(tmp_path: Path) -> None:
    archive = tmp_path / "bundle.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("vcpkg-artifacts/main.js", "// main\n")
    destination = tmp_path / "out"

    RealArchiveExtractor().extract(archive, destination)

    assert (destination / "vcpkg-artifacts" / "main.js").exists()


def test_zip_entries_outside_destination_are_rejected(tmp_path: Path) -> None:
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../escaped.txt", "nope")
    destination = tmp_path / "out"

    with pytest.raises(ExtractionError, match="outside"):
        RealArchiveExtractor().extract(archive, destination)

    assert not (tmp_path / "escaped.txt").exists()


def test_tar_entries_outside_destination_are_rejected(tmp_path: Path) -> None:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        info = tarfile.TarInfo("../escaped.txt")
        info.size = 4
        tar.addfile(info, io.BytesIO(b"nope"))
    archive = tmp_path / "evil.tar.gz"
    archive.write_bytes(buffer.getvalue())
    destination = tmp_path / "out"
    destination.mkdir()

    with pytest.raises(ExtractionError):
        RealArchiveExtractor().extract(archive, destination)

    assert not (tmp_path / "escaped.txt").exists()


def test_corrupt_archive_is_extraction_error(tmp_path: Path) -> None:
    archive = tmp_path / "bundle.tar.gz"
    archive.write_bytes(b"definitely not an archive")

    with pytest.raises(ExtractionError, match="Failed to extract"):
        RealArchiveExtractor().extract(archive, tmp_path / "out")
