"""Artifact commands delegated to vcpkg-artifacts.

Each command turns its options into ParsedArguments, forwards them after
the command verb and positional arguments, and exits with the delegate's
normalized exit code.
"""

from collections.abc import Callable
from typing import Any, NoReturn

import click

from vce.artifacts.forwarding import ARTIFACT_SWITCH_GROUPS, forward_common_artifacts_arguments
from vce.artifacts.invocation import run_configure_environment
from vce.artifacts.models import ParsedArguments
from vce.cli.ensure import user_facing_artifacts_errors
from vce.core.context import VceContext

# Every platform switch, in the order the switch groups declare them
ARTIFACT_SWITCHES: tuple[str, ...] = tuple(
    member for group in ARTIFACT_SWITCH_GROUPS for member in group.members
)

_SWITCH_HELP = {
    "windows": "Acquire artifacts for Windows",
    "osx": "Acquire artifacts for macOS",
    "linux": "Acquire artifacts for Linux",
    "freebsd": "Acquire artifacts for FreeBSD",
    "x86": "Acquire artifacts for an x86 host",
    "x64": "Acquire artifacts for an x64 host",
    "arm": "Acquire artifacts for an ARM host",
    "arm64": "Acquire artifacts for an ARM64 host",
    "target:x86": "Acquire artifacts targeting x86",
    "target:x64": "Acquire artifacts targeting x64",
    "target:arm": "Acquire artifacts targeting ARM",
    "target:arm64": "Acquire artifacts targeting ARM64",
}

F = Callable[..., Any]


def switch_param_name(switch: str) -> str:
    """Python identifier click uses for a switch ("target:x64" -> "target_x64")."""
    return switch.replace(":", "_")


def artifact_switches(fn: F) -> F:
    """Add the platform switches shared by artifact-acquiring commands."""
    for switch in reversed(ARTIFACT_SWITCHES):
        fn = click.option(
            f"--{switch}", switch_param_name(switch), is_flag=True, help=_SWITCH_HELP[switch]
        )(fn)
    return fn


def parsed_arguments(params: dict[str, Any], setting_names: tuple[str, ...]) -> ParsedArguments:
    """Collect enabled switches and given settings from click parameters.

    Switches keep ARTIFACT_SWITCHES order and settings keep setting_names
    order, so the forwarded command line is reproducible.
    """
    switches = tuple(s for s in ARTIFACT_SWITCHES if params.get(switch_param_name(s)))
    settings: dict[str, str] = {}
    for name in setting_names:
        value = params.get(name.replace("-", "_"))
        if value is not None:
            settings[name] = str(value)
    return ParsedArguments(switches=switches, settings=settings)


def run_artifacts_command(
    ctx: VceContext, leading_args: list[str], parsed: ParsedArguments
) -> NoReturn:
    """Forward the command to vcpkg-artifacts and exit with its exit code."""
    args = list(leading_args)
    with user_facing_artifacts_errors():
        forward_common_artifacts_arguments(args, parsed)
        exit_code = run_configure_environment(ctx, args)
    raise SystemExit(exit_code)


@click.command("activate")
@artifact_switches
@click.option("--msbuild-props", help="Write MSBuild properties for the activation to this file")
@click.option("--json", "json_path", help="Write the activation as JSON to this file")
@click.pass_obj
def activate_cmd(ctx: VceContext, **params: Any) -> None:
    """Activate the artifacts of the current project.

    Examples:

    \b
      # Activate for the host platform
      vce activate

    \b
      # Activate for Windows, targeting ARM64
      vce activate --windows --target:arm64
    """
    params["json"] = params.pop("json_path")
    run_artifacts_command(
        ctx, ["activate"], parsed_arguments(params, ("msbuild-props", "json"))
    )


@click.command("deactivate")
@click.pass_obj
def deactivate_cmd(ctx: VceContext) -> None:
    """Deactivate the artifacts of the current project."""
    run_artifacts_command(ctx, ["deactivate"], ParsedArguments())


@click.command("use")
@click.argument("artifacts", nargs=-1, required=True)
@artifact_switches
@click.option("--version", help="Version of the artifact to use")
@click.option("--msbuild-props", help="Write MSBuild properties for the activation to this file")
@click.option("--json", "json_path", help="Write the activation as JSON to this file")
@click.pass_obj
def use_cmd(ctx: VceContext, artifacts: tuple[str, ...], **params: Any) -> None:
    """Activate ARTIFACTS in the current shell without changing the project."""
    params["json"] = params.pop("json_path")
    run_artifacts_command(
        ctx,
        ["use", *artifacts],
        parsed_arguments(params, ("version", "msbuild-props", "json")),
    )


@click.group("add")
def add_group() -> None:
    """Add a dependency to the current project."""


@add_group.command("artifact")
@click.argument("artifact")
@click.option("--version", help="Version of the artifact to add")
@click.pass_obj
def add_artifact_cmd(ctx: VceContext, artifact: str, version: str | None) -> None:
    """Add ARTIFACT to the project's vcpkg-configuration.json."""
    run_artifacts_command(
        ctx, ["add", artifact], parsed_arguments({"version": version}, ("version",))
    )


@click.group("find")
def find_group() -> None:
    """Search for installable items."""


@find_group.command("artifact")
@click.argument("artifact")
@artifact_switches
@click.option("--version", help="Version of the artifact to find")
@click.pass_obj
def find_artifact_cmd(ctx: VceContext, artifact: str, **params: Any) -> None:
    """Search registries for ARTIFACT."""
    run_artifacts_command(ctx, ["find", artifact], parsed_arguments(params, ("version",)))


@click.command("generate-msbuild-props")
@artifact_switches
@click.option(
    "--msbuild-props", required=True, help="File the MSBuild properties are written to"
)
@click.pass_obj
def generate_msbuild_props_cmd(ctx: VceContext, **params: Any) -> None:
    """Write MSBuild properties for the project's artifacts without activating them."""
    run_artifacts_command(
        ctx, ["generate-msbuild-props"], parsed_arguments(params, ("msbuild-props",))
    )


@click.command("update")
@click.pass_obj
def update_cmd(ctx: VceContext) -> None:
    """Update the artifact registries' indexes."""
    run_artifacts_command(ctx, ["update"], ParsedArguments())


@click.command("regenerate")
@click.argument("registry")
@click.pass_obj
def regenerate_cmd(ctx: VceContext, registry: str) -> None:
    """Regenerate the index of the artifact REGISTRY directory."""
    run_artifacts_command(ctx, ["regenerate", registry], ParsedArguments())
