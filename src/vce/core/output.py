"""User-facing output helpers.

Status and error messages go to stderr so that stdout stays reserved for
whatever the artifacts delegate prints.
"""

import click


def user_output(message: str = "") -> None:
    """Print a message for the user on stderr."""
    click.echo(message, err=True)


def user_warning(message: str) -> None:
    """Print a warning for the user on stderr."""
    click.echo(click.style("warning: ", fg="yellow", bold=True) + message, err=True)
