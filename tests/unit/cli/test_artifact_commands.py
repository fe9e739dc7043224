"""Tests for the artifact commands delegated to vcpkg-artifacts."""

from click.testing import CliRunner

from tests.test_utils.context_builders import install_artifacts
from vce.cli.cli import cli
from vce.core.config import BundleSettings
from vce.core.context import VceContext
from vce.core.paths import ToolPaths
from vce.gateway.process.fake import FakeProcessRunner


def _context(tool_paths: ToolPaths, runner: FakeProcessRunner) -> VceContext:
    install_artifacts(tool_paths.install_dir, version=None, development=True)
    return VceContext.for_test(paths=tool_paths, process_runner=runner)


def _forwarded(runner: FakeProcessRunner) -> list[str]:
    """Arguments after the entry point, up to the first internal flag."""
    invocation = runner.last_invocation
    assert invocation is not None
    forwarded = list(invocation.arguments[1:])
    return forwarded[: forwarded.index("--vcpkg-root")]


def test_activate_forwards_switches_and_settings(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(
        cli,
        ["activate", "--target:arm64", "--windows", "--json", "out.json"],
        obj=ctx,
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == [
        "activate",
        "--windows",
        "--target:arm64",
        "--json",
        "out.json",
    ]


def test_delegate_exit_code_is_propagated(tool_paths: ToolPaths) -> None:
    ctx = _context(tool_paths, FakeProcessRunner(exit_code=42))

    result = CliRunner().invoke(cli, ["deactivate"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 42


def test_out_of_range_exit_code_becomes_one(tool_paths: ToolPaths) -> None:
    ctx = _context(tool_paths, FakeProcessRunner(exit_code=300))

    result = CliRunner().invoke(cli, ["update"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 1


def test_conflicting_switches_fail_without_running(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(
        cli, ["activate", "--windows", "--linux"], obj=ctx, catch_exceptions=False
    )

    assert result.exit_code == 1
    assert "Only one operating system" in result.output
    assert process_runner.invocations == []


def test_use_forwards_artifacts_before_switches(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(
        cli,
        ["use", "cmake", "ninja", "--x64", "--version", "3.28"],
        obj=ctx,
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == ["use", "cmake", "ninja", "--x64", "--version", "3.28"]


def test_use_requires_an_artifact(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(cli, ["use"], obj=ctx)

    assert result.exit_code == 2
    assert process_runner.invocations == []


def test_add_artifact(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(
        cli, ["add", "artifact", "microsoft:cmake", "--version", "3.28"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == ["add", "microsoft:cmake", "--version", "3.28"]


def test_find_artifact(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(cli, ["find", "artifact", "cmake", "--osx"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == ["find", "cmake", "--osx"]


def test_generate_msbuild_props_requires_output(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(cli, ["generate-msbuild-props"], obj=ctx)

    assert result.exit_code == 2
    assert process_runner.invocations == []


def test_generate_msbuild_props(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(
        cli, ["generate-msbuild-props", "--msbuild-props", "out.props", "--arm"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == [
        "generate-msbuild-props",
        "--arm",
        "--msbuild-props",
        "out.props",
    ]


def test_regenerate_registry(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = _context(tool_paths, process_runner)

    result = CliRunner().invoke(cli, ["regenerate", "registry-dir"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert _forwarded(process_runner) == ["regenerate", "registry-dir"]


def test_read_only_root_without_install_reports_error(tool_paths: ToolPaths) -> None:
    process_runner = FakeProcessRunner()
    ctx = VceContext.for_test(
        paths=tool_paths,
        process_runner=process_runner,
        bundle_settings=BundleSettings(readonly=True),
    )

    result = CliRunner().invoke(cli, ["activate"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 1
    assert "vcpkg-artifacts is not installed" in result.output
    assert process_runner.invocations == []


def test_launch_failure_reports_error(tool_paths: ToolPaths) -> None:
    install_artifacts(tool_paths.install_dir, version=None, development=True)
    ctx = VceContext.for_test(
        paths=tool_paths, process_runner=FakeProcessRunner(launch_error="Failed to start node")
    )

    result = CliRunner().invoke(cli, ["activate"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 1
    assert "Error: Failed to start node" in result.output
