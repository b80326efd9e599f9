"""
Native Click implementation of the toolchain command.

Usage: solcheck toolchain [install|info]
"""

from __future__ import annotations

import asyncio

import click

from ...core.bootstrap import bootstrap
from ...core.container import resolve
from ...core.exceptions import ToolchainError
from ...core.interfaces.presenter import IPresenter
from ...services.toolchain import toolchain_components
from ..context import SolcheckContext


class _EchoTerminal:
    """Terminal that prints toolchain progress straight to the console."""

    def log(self, *args) -> None:
        click.echo("".join(f"{arg}" for arg in args))

    def write(self, text: str) -> None:
        click.echo(text, nl=False)

    def write_error(self, text: str) -> None:
        click.echo(text, nl=False, err=True)


@click.group("toolchain", invoke_without_command=True)
@click.pass_context
def toolchain(ctx: click.Context) -> None:
    """Manage the compiler, linker and standard library.

    \b
    Examples:

        solcheck toolchain install   # Download missing components

        solcheck toolchain info      # Show paths and versions
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@toolchain.command("install")
@click.pass_obj
def install_cmd(ctx: SolcheckContext) -> None:
    """Install every missing toolchain component."""
    bootstrap(ctx.settings)
    components = toolchain_components(ctx.settings.toolchain)
    try:
        asyncio.run(components.ensure_installed(_EchoTerminal()))
    except ToolchainError as e:
        raise click.ClickException(str(e)) from e
    click.echo("Toolchain is installed.")


@toolchain.command("info")
@click.pass_obj
def info_cmd(ctx: SolcheckContext) -> None:
    """Show where components live and which versions are installed."""
    bootstrap(ctx.settings)
    components = toolchain_components(ctx.settings.toolchain)
    rows = []
    for component in components.components():
        info = component.info()
        rows.append(
            [
                info.name,
                info.version or "-",
                "yes" if info.installed else "no",
                info.path,
            ]
        )
    presenter = resolve(IPresenter)  # type: ignore[type-abstract]
    presenter.print_table(["Component", "Version", "Installed", "Path"], rows)
