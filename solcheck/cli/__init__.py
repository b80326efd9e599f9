"""
Click-based CLI for solcheck.

This module provides the main Click command group and serves as the
entry point for the solcheck CLI.

Usage:
    from solcheck.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from ..core.exceptions import SolcheckException
from .context import SolcheckContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("solcheck")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="solcheck")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """solcheck - as-you-type diagnostics for TON Solidity contracts

    Compiles contracts with the solc + tvm_linker toolchain and reports
    compiler and linter diagnostics.

    \b
    Quick Start:
        solcheck check contracts/Wallet.sol   Lint and compile one file
        solcheck promote contracts/Wallet.sol Move build outputs to build/

    \b
    Toolchain:
        solcheck toolchain install            Download compiler, linker, stdlib
        solcheck toolchain info               Show installed components

    \b
    Configuration:
        solcheck config                       View or set configuration
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        try:
            ctx.obj = SolcheckContext.create()
        except SolcheckException as e:
            raise click.ClickException(str(e)) from e


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "SolcheckContext",
    "__version__",
    "cli",
    "register_commands",
]
