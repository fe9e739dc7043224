"""Global vce configuration and vcpkg bundle settings."""

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from vce.artifacts.errors import ConfigError

BUNDLE_SETTINGS_NAME = "vcpkg-bundle.json"


@dataclass(frozen=True)
class GlobalConfig:
    """In-memory representation of `~/.vce/config.toml`.

    Example config.toml:
      # Pin the standalone bundle; omit both to track the latest bundle
      bundle_version = "2025-01-29"
      bundle_sha512 = "..."

      node = "/usr/local/bin/node"
      disable_metrics = false
    """

    node: Path | None
    disable_metrics: bool
    bundle_version: str | None
    bundle_sha512: str | None
    language_file: Path | None
    downloads: Path | None
    artifacts_root: Path | None
    registries_cache: Path | None

    @staticmethod
    def defaults() -> "GlobalConfig":
        return GlobalConfig(
            node=None,
            disable_metrics=False,
            bundle_version=None,
            bundle_sha512=None,
            language_file=None,
            downloads=None,
            artifacts_root=None,
            registries_cache=None,
        )


@dataclass(frozen=True)
class BundleSettings:
    """Settings from `vcpkg-bundle.json` at the vcpkg root.

    A read-only bundle (e.g. one shipped inside an IDE) must never be
    modified, so vcpkg-artifacts is not provisioned into it.
    """

    readonly: bool


@cache
def get_global_config_keys() -> dict[str, str]:
    """Get user-exposed global config keys with descriptions.

    Order determines display order in 'vce config list'.
    """
    return {
        "node": "Path to the node executable used to run vcpkg-artifacts",
        "disable_metrics": "Do not record artifact usage metrics",
        "bundle_version": "Pinned vcpkg-standalone-bundle release (unset = latest)",
        "bundle_sha512": "SHA-512 of the pinned bundle archive",
        "language_file": "Localized messages file handed to vcpkg-artifacts",
        "downloads": "Downloads directory (defaults to <vcpkg root>/downloads)",
        "artifacts_root": "Directory where artifacts are installed",
        "registries_cache": "Registries cache directory",
    }


BOOLEAN_CONFIG_KEYS = frozenset({"disable_metrics"})


def get_vce_home(environ: Mapping[str, str]) -> Path:
    """Return the vce home directory, `$VCE_HOME` or `~/.vce`."""
    override = environ.get("VCE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".vce"


def get_config_path(environ: Mapping[str, str]) -> Path:
    return get_vce_home(environ) / "config.toml"


def _optional_str(data: Mapping[str, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _optional_path(data: Mapping[str, object], key: str) -> Path | None:
    value = _optional_str(data, key)
    if value is None:
        return None
    return Path(value).expanduser()


def load_global_config(config_path: Path) -> GlobalConfig:
    """Load config.toml if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML
    """
    if not config_path.exists():
        return GlobalConfig.defaults()

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    bundle_version = _optional_str(data, "bundle_version")
    bundle_sha512 = _optional_str(data, "bundle_sha512")
    if bundle_sha512 is not None and bundle_version is None:
        raise ConfigError(f"'bundle_sha512' requires 'bundle_version' in {config_path}")

    return GlobalConfig(
        node=_optional_path(data, "node"),
        disable_metrics=bool(data.get("disable_metrics", False)),
        bundle_version=bundle_version,
        bundle_sha512=bundle_sha512,
        language_file=_optional_path(data, "language_file"),
        downloads=_optional_path(data, "downloads"),
        artifacts_root=_optional_path(data, "artifacts_root"),
        registries_cache=_optional_path(data, "registries_cache"),
    )


def load_bundle_settings(vcpkg_root: Path) -> BundleSettings:
    """Load vcpkg-bundle.json from the vcpkg root.

    A missing file means a regular, writable vcpkg checkout.

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    path = vcpkg_root / BUNDLE_SETTINGS_NAME
    if not path.exists():
        return BundleSettings(readonly=False)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to load {path}: expected a JSON object")

    readonly = data.get("readonly", False)
    if not isinstance(readonly, bool):
        raise ConfigError(f"Failed to load {path}: 'readonly' must be true or false")
    return BundleSettings(readonly=readonly)


def metrics_disabled(config: GlobalConfig, environ: Mapping[str, str]) -> bool:
    """Metrics are off when configured so or when VCPKG_DISABLE_METRICS is set."""
    return config.disable_metrics or "VCPKG_DISABLE_METRICS" in environ


def load_language_payload(config: GlobalConfig) -> str:
    """Read the configured localization file, or return "" when none is configured.

    Raises:
        ConfigError: If the configured file can't be read
    """
    if config.language_file is None:
        return ""
    try:
        return config.language_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read language file {config.language_file}: {e}") from e


def environ_snapshot() -> dict[str, str]:
    """Copy of the process environment, taken once at startup."""
    return dict(os.environ)
