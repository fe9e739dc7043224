"""CLI error handling for precondition checks.

Domain code raises ArtifactsError subclasses; the CLI converts them into
UserFacingCliError so click prints a single red "Error:" line and exits 1.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, NoReturn, TypeVar

import click

from vce.artifacts.errors import ArtifactsError

T = TypeVar("T")


class UserFacingCliError(click.ClickException):
    """An error whose message is meant for the user, not a traceback."""

    exit_code = 1

    def show(self, file: IO[str] | None = None) -> None:
        click.echo(click.style("Error: ", fg="red") + self.message, err=True)


class Ensure:
    """Helper class for CLI precondition checks."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Raise UserFacingCliError with error_message unless condition holds."""
        if not condition:
            raise UserFacingCliError(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Return value, or raise UserFacingCliError if it is None."""
        if value is None:
            raise UserFacingCliError(error_message)
        return value

    @staticmethod
    def fail(error_message: str) -> NoReturn:
        raise UserFacingCliError(error_message)


@contextmanager
def user_facing_artifacts_errors() -> Iterator[None]:
    """Re-raise any ArtifactsError inside the block as a UserFacingCliError."""
    try:
        yield
    except ArtifactsError as e:
        raise UserFacingCliError(e.message) from e
