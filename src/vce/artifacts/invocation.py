"""Build and run the vcpkg-artifacts command line.

The delegate receives its arguments in a fixed order: the entry point, the
forwarded command arguments, optional debug and telemetry flags, then the
internal "--z-*" configuration flags, and finally an optional language file.
"""

import logging
from pathlib import Path

from vce.artifacts.bundle import ensure_artifacts_installed
from vce.artifacts.errors import DelegateLaunchError
from vce.artifacts.models import DelegateInvocation
from vce.artifacts.telemetry import track_telemetry
from vce.core.context import VceContext
from vce.core.output import user_warning
from vce.core.paths import ToolPaths
from vce.gateway.unique_names.abc import UniqueNames

logger = logging.getLogger(__name__)

# Some hosts keep only the low 7 bits of an exit status
MAX_PASSTHROUGH_EXIT_CODE = 127


def normalize_exit_code(raw: int) -> int:
    """Map the delegate's raw exit status to the code vce exits with.

    Values in [0, 127] pass through unchanged. Anything else, including
    negative statuses for signal-terminated processes, becomes 1.
    """
    if raw < 0 or raw > MAX_PASSTHROUGH_EXIT_CODE:
        return 1
    return raw


def telemetry_file_path(temp_dir: Path, unique_names: UniqueNames) -> Path:
    return temp_dir / f"{unique_names.generate()}_artifacts_telemetry.txt"


def _remove_staged_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove %s: %s", path, e)


def build_invocation(
    *,
    node: Path,
    entry_point: Path,
    forwarded_args: list[str],
    paths: ToolPaths,
    unique_names: UniqueNames,
    debug: bool,
    telemetry_file: Path | None,
    language_payload: str,
) -> DelegateInvocation:
    """Assemble the delegate invocation.

    A non-empty language payload is staged into the temp directory so the
    delegate can read it from disk.

    Raises:
        DelegateLaunchError: If the language payload can't be staged
    """
    args: list[str] = [str(entry_point), *forwarded_args]
    if debug:
        args.append("--debug")

    if telemetry_file is not None:
        args.extend(["--z-telemetry-file", str(telemetry_file)])

    previous_environment = paths.temp_dir / f"{unique_names.generate()}_previous_environment.txt"
    args.extend(["--vcpkg-root", str(paths.root)])
    args.extend(["--z-vcpkg-command", str(paths.exe_path)])
    args.extend(["--z-vcpkg-artifacts-root", str(paths.artifacts_root)])
    args.extend(["--z-vcpkg-downloads", str(paths.downloads)])
    args.extend(["--z-vcpkg-registries-cache", str(paths.registries_cache)])
    args.extend(["--z-next-previous-environment", str(previous_environment)])
    args.extend(["--z-global-config", str(paths.global_config)])

    language_file = None
    if language_payload:
        language_file = paths.temp_dir / f"{unique_names.generate()}_messages.json"
        try:
            language_file.write_text(language_payload, encoding="utf-8")
        except OSError as e:
            _remove_staged_file(language_file)
            raise DelegateLaunchError(f"Failed to stage language file {language_file}: {e}") from e
        args.extend(["--language", str(language_file)])

    return DelegateInvocation(
        executable=node,
        arguments=tuple(args),
        working_directory=paths.original_cwd,
        telemetry_file=telemetry_file,
        language_file=language_file,
    )


def run_configure_environment(ctx: VceContext, forwarded_args: list[str]) -> int:
    """Provision vcpkg-artifacts if needed, run it, and return vce's exit code.

    forwarded_args must already have been produced by
    forward_common_artifacts_arguments, so switch conflicts were rejected
    before anything here runs.

    Raises:
        ArtifactsNotInstalledError: If artifacts are absent from a read-only root
        ProvisioningError: If installing artifacts failed
        DelegateLaunchError: If node is missing or the process could not start
    """
    user_warning("vcpkg-artifacts is experimental and may change at any time.")

    entry_point = ensure_artifacts_installed(
        downloader=ctx.downloader,
        extractor=ctx.extractor,
        unique_names=ctx.unique_names,
        release=ctx.release,
        install_dir=ctx.paths.install_dir,
        downloads_dir=ctx.paths.downloads,
        can_provision=ctx.can_provision,
    )

    if ctx.node is None:
        raise DelegateLaunchError(
            "Could not find node, which is required to run vcpkg-artifacts. "
            "Install node.js or set 'node' with: vce config set node <path>"
        )

    try:
        ctx.paths.temp_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DelegateLaunchError(f"Failed to create {ctx.paths.temp_dir}: {e}") from e

    telemetry_file = None
    if ctx.metrics.enabled:
        telemetry_file = telemetry_file_path(ctx.paths.temp_dir, ctx.unique_names)

    invocation: DelegateInvocation | None = None
    try:
        invocation = build_invocation(
            node=ctx.node,
            entry_point=entry_point,
            forwarded_args=forwarded_args,
            paths=ctx.paths,
            unique_names=ctx.unique_names,
            debug=ctx.debug,
            telemetry_file=telemetry_file,
            language_payload=ctx.language_payload,
        )
        raw_exit_code = ctx.process_runner.run(invocation)
        if telemetry_file is not None:
            track_telemetry(telemetry_file, ctx.metrics)
    finally:
        if telemetry_file is not None:
            _remove_staged_file(telemetry_file)
        if invocation is not None and invocation.language_file is not None:
            _remove_staged_file(invocation.language_file)

    return normalize_exit_code(raw_exit_code)
