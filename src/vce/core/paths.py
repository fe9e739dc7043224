"""Filesystem locations handed to vcpkg-artifacts."""

import sys
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from vce.core.config import GlobalConfig

VCPKG_ROOT_MARKER = ".vcpkg-root"
INSTALL_DIR_NAME = "vcpkg-artifacts"


@dataclass(frozen=True)
class ToolPaths:
    """Resolved paths for one vce invocation."""

    root: Path
    exe_path: Path
    install_dir: Path
    artifacts_root: Path
    downloads: Path
    registries_cache: Path
    global_config: Path
    original_cwd: Path
    temp_dir: Path


def find_vcpkg_root(cwd: Path) -> Path | None:
    """Walk up from cwd looking for a directory containing `.vcpkg-root`."""
    for parent in [cwd, *cwd.parents]:
        if (parent / VCPKG_ROOT_MARKER).exists():
            return parent
    return None


def get_exe_path() -> Path:
    """Path of the script that started this process."""
    return Path(sys.argv[0]).resolve()


def resolve_vcpkg_root(
    explicit_root: Path | None, environ: Mapping[str, str], cwd: Path, exe_path: Path
) -> Path:
    """Pick the vcpkg root.

    Precedence: explicit --vcpkg-root, then $VCPKG_ROOT, then the nearest
    ancestor of cwd containing `.vcpkg-root`, then the directory of the
    running executable.
    """
    if explicit_root is not None:
        return explicit_root.resolve()
    env_root = environ.get("VCPKG_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    found = find_vcpkg_root(cwd)
    if found is not None:
        return found
    return exe_path.parent


def _user_configuration_home(environ: Mapping[str, str]) -> Path:
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "vcpkg"
    return Path.home() / ".vcpkg"


def _user_cache_home(environ: Mapping[str, str]) -> Path:
    xdg = environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / "vcpkg"
    return Path.home() / ".cache" / "vcpkg"


def resolve_paths(
    *,
    explicit_root: Path | None,
    config: GlobalConfig,
    environ: Mapping[str, str],
    cwd: Path,
    exe_path: Path,
) -> ToolPaths:
    """Resolve every path vce and vcpkg-artifacts need.

    Configured values win over environment variables, which win over defaults.
    """
    root = resolve_vcpkg_root(explicit_root, environ, cwd, exe_path)

    downloads = config.downloads
    if downloads is None:
        env_downloads = environ.get("VCPKG_DOWNLOADS")
        downloads = Path(env_downloads) if env_downloads else root / "downloads"

    registries_cache = config.registries_cache
    if registries_cache is None:
        env_cache = environ.get("X_VCPKG_REGISTRIES_CACHE")
        registries_cache = Path(env_cache) if env_cache else _user_cache_home(environ) / "registries"

    artifacts_root = config.artifacts_root
    if artifacts_root is None:
        artifacts_root = _user_cache_home(environ) / "artifacts"

    return ToolPaths(
        root=root,
        exe_path=exe_path,
        install_dir=root / INSTALL_DIR_NAME,
        artifacts_root=artifacts_root,
        downloads=downloads,
        registries_cache=registries_cache,
        global_config=_user_configuration_home(environ) / "vcpkg-configuration.json",
        original_cwd=cwd,
        temp_dir=Path(tempfile.gettempdir()) / "vcpkg",
    )
