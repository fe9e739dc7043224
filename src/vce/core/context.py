"""Application context with dependency injection."""

import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from vce.artifacts.models import BundleRelease
from vce.core.config import (
    BundleSettings,
    GlobalConfig,
    environ_snapshot,
    get_config_path,
    get_vce_home,
    load_bundle_settings,
    load_global_config,
    load_language_payload,
    metrics_disabled,
)
from vce.core.paths import ToolPaths, get_exe_path, resolve_paths
from vce.gateway.archive.abc import ArchiveExtractor
from vce.gateway.archive.real import RealArchiveExtractor
from vce.gateway.downloader.abc import BundleDownloader
from vce.gateway.downloader.real import RealBundleDownloader
from vce.gateway.metrics.abc import MetricsContext
from vce.gateway.metrics.real import RealMetricsCollector
from vce.gateway.process.abc import ProcessRunner
from vce.gateway.process.real import RealProcessRunner
from vce.gateway.unique_names.abc import UniqueNames
from vce.gateway.unique_names.real import RealUniqueNames


@dataclass(frozen=True)
class VceContext:
    """Immutable context holding all dependencies for vce operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    downloader: BundleDownloader
    extractor: ArchiveExtractor
    process_runner: ProcessRunner
    unique_names: UniqueNames
    metrics: MetricsContext
    paths: ToolPaths
    global_config: GlobalConfig
    config_path: Path
    bundle_settings: BundleSettings
    release: BundleRelease
    node: Path | None
    # Contents of the localized messages file; empty when none is loaded
    language_payload: str
    debug: bool

    @property
    def can_provision(self) -> bool:
        """Whether vcpkg-artifacts may be (re)installed under this vcpkg root."""
        return not self.bundle_settings.readonly

    @staticmethod
    def for_test(
        *,
        paths: ToolPaths,
        downloader: BundleDownloader | None = None,
        extractor: ArchiveExtractor | None = None,
        process_runner: ProcessRunner | None = None,
        unique_names: UniqueNames | None = None,
        metrics: MetricsContext | None = None,
        global_config: GlobalConfig | None = None,
        config_path: Path | None = None,
        bundle_settings: BundleSettings | None = None,
        release: BundleRelease | None = None,
        node: Path | None = None,
        language_payload: str = "",
        debug: bool = False,
    ) -> "VceContext":
        """Create a context backed by fakes for anything not supplied.

        Args:
            paths: Paths to use; tests normally root these under tmp_path
            downloader: Defaults to a FakeBundleDownloader that knows no URIs
            extractor: Defaults to a FakeArchiveExtractor that writes nothing
            process_runner: Defaults to a FakeProcessRunner returning 0
            unique_names: Defaults to FakeUniqueNames
            metrics: Defaults to metrics disabled with a FakeMetricsCollector
            global_config: Defaults to GlobalConfig.defaults()
            config_path: Defaults to <paths.root>/.vce/config.toml
            bundle_settings: Defaults to a writable bundle
            release: Defaults to a development release
            node: Defaults to /usr/bin/node
            language_payload: Localization payload ("" = none loaded)
            debug: Whether debug mode is enabled

        Example:
            >>> ctx = VceContext.for_test(paths=tool_paths_for_test(tmp_path))
        """
        from vce.gateway.archive.fake import FakeArchiveExtractor
        from vce.gateway.downloader.fake import FakeBundleDownloader
        from vce.gateway.metrics.fake import FakeMetricsCollector
        from vce.gateway.process.fake import FakeProcessRunner
        from vce.gateway.unique_names.fake import FakeUniqueNames

        return VceContext(
            downloader=downloader if downloader is not None else FakeBundleDownloader(),
            extractor=extractor if extractor is not None else FakeArchiveExtractor(),
            process_runner=process_runner if process_runner is not None else FakeProcessRunner(),
            unique_names=unique_names if unique_names is not None else FakeUniqueNames(),
            metrics=(
                metrics
                if metrics is not None
                else MetricsContext(enabled=False, collector=FakeMetricsCollector())
            ),
            paths=paths,
            global_config=global_config if global_config is not None else GlobalConfig.defaults(),
            config_path=(
                config_path if config_path is not None else paths.root / ".vce" / "config.toml"
            ),
            bundle_settings=(
                bundle_settings if bundle_settings is not None else BundleSettings(readonly=False)
            ),
            release=release if release is not None else BundleRelease(version=None, sha512=None),
            node=node if node is not None else Path("/usr/bin/node"),
            language_payload=language_payload,
            debug=debug,
        )


def _resolve_node(config: GlobalConfig) -> Path | None:
    if config.node is not None:
        return config.node
    found = shutil.which("node")
    if found is None:
        return None
    return Path(found)


def create_context(
    *,
    vcpkg_root: Path | None,
    debug: bool,
    environ: Mapping[str, str] | None = None,
) -> VceContext:
    """Create production context with real implementations.

    Raises:
        ConfigError: If config.toml, vcpkg-bundle.json or the language file is invalid
    """
    if environ is None:
        environ = environ_snapshot()

    config_path = get_config_path(environ)
    config = load_global_config(config_path)
    paths = resolve_paths(
        explicit_root=vcpkg_root,
        config=config,
        environ=environ,
        cwd=Path.cwd(),
        exe_path=get_exe_path(),
    )
    metrics = MetricsContext(
        enabled=not metrics_disabled(config, environ),
        collector=RealMetricsCollector(get_vce_home(environ) / "metrics.jsonl"),
    )

    return VceContext(
        downloader=RealBundleDownloader(),
        extractor=RealArchiveExtractor(),
        process_runner=RealProcessRunner(),
        unique_names=RealUniqueNames(),
        metrics=metrics,
        paths=paths,
        global_config=config,
        config_path=config_path,
        bundle_settings=load_bundle_settings(paths.root),
        release=BundleRelease(version=config.bundle_version, sha512=config.bundle_sha512),
        node=_resolve_node(config),
        language_payload=load_language_payload(config),
        debug=debug,
    )
