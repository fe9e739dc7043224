"""Builders for test contexts, paths and bundle archives."""

import io
import tarfile
from pathlib import Path

from vce.core.paths import ToolPaths


def tool_paths_for_test(base: Path) -> ToolPaths:
    """Create ToolPaths rooted under base, with the vcpkg root and cwd created.

    Layout:
        base/vcpkg/                    vcpkg root
        base/vcpkg/vcpkg-artifacts/    install dir (not created)
        base/vcpkg/downloads/          downloads (not created)
        base/project/                  original working directory
        base/tmp/                      temp dir (not created)
    """
    root = base / "vcpkg"
    root.mkdir(parents=True, exist_ok=True)
    cwd = base / "project"
    cwd.mkdir(parents=True, exist_ok=True)
    return ToolPaths(
        root=root,
        exe_path=root / "vce",
        install_dir=root / "vcpkg-artifacts",
        artifacts_root=base / "artifacts",
        downloads=root / "downloads",
        registries_cache=base / "registries",
        global_config=base / "config" / "vcpkg-configuration.json",
        original_cwd=cwd,
        temp_dir=base / "tmp",
    )


def make_tarball(files: dict[str, str]) -> bytes:
    """Build an in-memory .tar.gz containing files (relative path -> text)."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def make_standalone_bundle(version_label: str = "new") -> bytes:
    """Build a standalone bundle tarball whose vcpkg-artifacts has an entry point."""
    return make_tarball(
        {
            "vcpkg-artifacts/main.js": f"// vcpkg-artifacts {version_label}\n",
            "vcpkg-artifacts/locales/messages.json": "{}\n",
            "scripts/bootstrap.sh": "#!/bin/sh\n",
            "triplets/x64-linux.cmake": "set(VCPKG_TARGET_ARCHITECTURE x64)\n",
        }
    )


def install_artifacts(install_dir: Path, *, version: str | None, development: bool) -> None:
    """Lay out an existing vcpkg-artifacts install for tests."""
    install_dir.mkdir(parents=True, exist_ok=True)
    (install_dir / "main.js").write_text("// installed\n", encoding="utf-8")
    if version is not None:
        (install_dir / "version.txt").write_text(version, encoding="utf-8")
    if development:
        (install_dir / "artifacts-development.txt").write_text("", encoding="utf-8")
