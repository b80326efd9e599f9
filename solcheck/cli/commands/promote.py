"""
Native Click implementation of the promote command.

Usage: solcheck promote FILE
"""

from __future__ import annotations

from pathlib import Path

import click

from ...core.bootstrap import bootstrap
from ...services.staging import StagingService
from ..context import SolcheckContext


@click.command("promote")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def promote(ctx: SolcheckContext, file: Path) -> None:
    """Move compiled artifacts of FILE into the build directory.

    The staged copy of FILE is removed as well.
    """
    bootstrap(ctx.settings)

    staging = StagingService.from_config(ctx.settings.layout, ctx.settings.validation)
    artifact = staging.promote(str(file.resolve()))

    if not artifact.promoted:
        click.echo("Nothing to promote.")
        return

    for label, path in (
        ("Bytecode", artifact.bytecode_path),
        ("Base64", artifact.base64_path),
        ("ABI", artifact.abi_path),
    ):
        if path:
            click.echo(f"{label}: {path}")
