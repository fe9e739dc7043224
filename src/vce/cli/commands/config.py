"""Manage the global vce configuration file."""

from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, cast

import click
import tomlkit

from vce.cli.ensure import Ensure
from vce.core.config import BOOLEAN_CONFIG_KEYS, get_global_config_keys
from vce.core.context import VceContext
from vce.core.output import user_output


def _format_config_value(value: object) -> str:
    """Format a config value for display."""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _parse_config_value(key: str, raw: str) -> str | bool:
    if key not in BOOLEAN_CONFIG_KEYS:
        return raw
    lowered = raw.lower()
    Ensure.invariant(
        lowered in ("true", "false"), f"Invalid value for {key}: expected true or false"
    )
    return lowered == "true"


def _write_config_value(config_path: Path, key: str, value: str | bool) -> None:
    """Set key in config.toml, preserving existing formatting and comments."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)
    else:
        doc = tomlkit.document()
        doc.add(tomlkit.comment("Global vce configuration"))

    assert isinstance(doc, MutableMapping), f"Expected MutableMapping, got {type(doc)}"
    cast(dict[str, Any], doc)[key] = value

    with config_path.open("w", encoding="utf-8") as f:
        tomlkit.dump(doc, f)


def _unset_config_value(config_path: Path, key: str) -> bool:
    if not config_path.exists():
        return False
    with config_path.open("r", encoding="utf-8") as f:
        doc = tomlkit.load(f)
    if key not in doc:
        return False
    del doc[key]
    with config_path.open("w", encoding="utf-8") as f:
        tomlkit.dump(doc, f)
    return True


@click.group("config")
def config_group() -> None:
    """Manage vce configuration."""


@config_group.command("keys")
def config_keys() -> None:
    """List all available configuration keys with descriptions."""
    formatter = click.HelpFormatter()
    user_output(click.style("Global configuration keys:", bold=True))
    formatter.write_dl(list(get_global_config_keys().items()))
    user_output(formatter.getvalue().rstrip())


@config_group.command("list")
@click.pass_obj
def config_list(ctx: VceContext) -> None:
    """Print a list of configuration keys and values."""
    user_output(click.style(f"Global configuration ({ctx.config_path}):", bold=True))
    for key in get_global_config_keys():
        value = getattr(ctx.global_config, key)
        if value is None:
            user_output(f"  {key}=(not set)")
        else:
            user_output(f"  {key}={_format_config_value(value)}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_get(ctx: VceContext, key: str) -> None:
    """Print the value of a given configuration key."""
    Ensure.invariant(key in get_global_config_keys(), f"Invalid key: {key}")
    value = Ensure.not_none(getattr(ctx.global_config, key), f"Key not set: {key}")
    click.echo(_format_config_value(value))


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: VceContext, key: str, value: str) -> None:
    """Set a configuration key in config.toml."""
    Ensure.invariant(key in get_global_config_keys(), f"Invalid key: {key}")
    _write_config_value(ctx.config_path, key, _parse_config_value(key, value))
    user_output(f"Set {key}={value}")


@config_group.command("unset")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_unset(ctx: VceContext, key: str) -> None:
    """Remove a configuration key from config.toml."""
    Ensure.invariant(key in get_global_config_keys(), f"Invalid key: {key}")
    Ensure.invariant(_unset_config_value(ctx.config_path, key), f"Key not set: {key}")
    user_output(f"Unset {key}")
