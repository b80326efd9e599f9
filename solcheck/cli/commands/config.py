"""
``solcheck config``: inspect and edit the project's ``.solcheck/config.toml``.

Values shown are the effective ones, after environment overrides
(``SOLCHECK_VALIDATION__LINTER=solium``) are applied.
"""

from typing import Any

import click

from ...config import CONFIGURABLE_KEYS, config_set
from ...core.exceptions import ConfigValidationError
from ..context import SolcheckContext


def _show(value: Any) -> str:
    return "(not set)" if value is None else str(value)


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show or change project settings.

    \b
    Examples:
        solcheck config list
        solcheck config get validation.linter
        solcheck config set validation.validation_delay 800
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
@click.pass_obj
def config_list_cmd(obj: SolcheckContext) -> None:
    """Show every option with its effective value."""
    current = obj.settings.to_config()
    section = None
    for key, info in CONFIGURABLE_KEYS.items():
        key_section = key.partition(".")[0]
        if key_section != section:
            section = key_section
            click.echo(f"[{section}]")
        value = current.get(key)
        changed = "" if value == info["default"] else "  (changed)"
        click.echo(f"  {key} = {_show(value)}{changed}")
        click.echo(f"      {info['description']}")

    click.echo("")
    click.echo(f"Config file: {obj.settings._config_file or '(none, using defaults)'}")


@config.command("get")
@click.argument("key")
@click.pass_obj
def config_get_cmd(obj: SolcheckContext, key: str) -> None:
    """Print the effective value of KEY (e.g. validation.linter)."""
    if key not in CONFIGURABLE_KEYS:
        raise click.ClickException(f"Unknown config key: {key}")
    click.echo(f"{key}: {_show(obj.settings.to_config().get(key))}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set_cmd(obj: SolcheckContext, key: str, value: str) -> None:
    """Store VALUE for KEY in .solcheck/config.toml."""
    try:
        config_path, typed_value = config_set(key, value, start_dir=str(obj.cwd))
    except ConfigValidationError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Set {key} = {typed_value}")
    click.echo(f"Saved to {config_path}")
