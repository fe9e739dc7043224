import logging
from pathlib import Path

import click

from vce.cli.commands.artifacts import (
    activate_cmd,
    add_group,
    deactivate_cmd,
    find_group,
    generate_msbuild_props_cmd,
    regenerate_cmd,
    update_cmd,
    use_cmd,
)
from vce.cli.commands.config import config_group
from vce.cli.commands.status import status_cmd
from vce.cli.ensure import user_facing_artifacts_errors
from vce.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="vce")
@click.option("--debug", is_flag=True, help="Enable debug logging (also passed to vcpkg-artifacts)")
@click.option(
    "--vcpkg-root",
    type=click.Path(file_okay=False, path_type=Path),
    help="vcpkg root directory (defaults to $VCPKG_ROOT or the nearest .vcpkg-root)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, vcpkg_root: Path | None) -> None:
    """Provision vcpkg-artifacts and run artifact commands with it."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        with user_facing_artifacts_errors():
            ctx.obj = create_context(vcpkg_root=vcpkg_root, debug=debug)


cli.add_command(activate_cmd)
cli.add_command(add_group)
cli.add_command(deactivate_cmd)
cli.add_command(find_group)
cli.add_command(generate_msbuild_props_cmd)
cli.add_command(regenerate_cmd)
cli.add_command(update_cmd)
cli.add_command(use_cmd)

cli.add_command(config_group)
cli.add_command(status_cmd)


def main() -> None:
    """CLI entry point used by the `vce` console script."""
    cli()
