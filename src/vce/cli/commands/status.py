"""Show the state of the local vcpkg-artifacts install."""

import click

from vce.artifacts.models import InstallationState
from vce.artifacts.staleness import check_installation
from vce.core.context import VceContext

_STATE_STYLES = {
    InstallationState.CURRENT: ("up to date", "green"),
    InstallationState.STALE: ("out of date", "yellow"),
    InstallationState.MISSING: ("not installed", "red"),
}

_REASON_TEXT = {
    "not-installed": "install directory does not exist",
    "no-marker": "version.txt is missing",
    "version-mismatch": "installed version differs from the pinned release",
    "development-sentinel-missing": "development sentinel file is missing",
    "up-to-date": "nothing to do",
}


@click.command("status")
@click.pass_obj
def status_cmd(ctx: VceContext) -> None:
    """Show whether vcpkg-artifacts is installed and current.

    Does not download or modify anything.

    Examples:

    \b
      vce status
    """
    check = check_installation(ctx.paths.install_dir, ctx.release)
    label, color = _STATE_STYLES[check.state]

    click.echo(f"vcpkg root:      {ctx.paths.root}")
    click.echo(f"install dir:     {ctx.paths.install_dir}")
    if ctx.release.version is None:
        click.echo("bundle release:  latest (development)")
    else:
        click.echo(f"bundle release:  {ctx.release.version}")
    if check.installed_version is not None:
        click.echo(f"installed:       {check.installed_version}")
    click.echo(
        "state:           "
        + click.style(label, fg=color)
        + f" ({_REASON_TEXT[check.reason]})"
    )
    if not ctx.can_provision:
        click.echo("provisioning:    disabled (read-only vcpkg root)")
    click.echo(f"metrics:         {'enabled' if ctx.metrics.enabled else 'disabled'}")
