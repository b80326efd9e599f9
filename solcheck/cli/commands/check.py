"""
Native Click implementation of the check command.

Usage: solcheck check FILE [--root DIR] [--no-compile] [--linter NAME]
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from ...core.bootstrap import bootstrap
from ...core.container import resolve
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import ValidationConfig
from ...core.models.diagnostic import DiagnosticSeverity
from ...core.models.source import SourceDocument
from ...services.compilation import CompilationDriver
from ...services.validation import CollectingPublisher, ValidationScheduler
from ..context import SolcheckContext


@click.command("check")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root used to resolve imports.",
)
@click.option("--no-compile", is_flag=True, help="Only run the linter.")
@click.option(
    "--linter",
    type=click.Choice(["solhint", "solium", "none"]),
    default=None,
    help="Override the configured linter.",
)
@click.pass_obj
def check(
    ctx: SolcheckContext,
    file: Path,
    root: Path | None,
    no_compile: bool,
    linter: str | None,
) -> None:
    """Lint and compile one contract file and print its diagnostics.

    Exits with status 1 when any error is reported.

    \b
    Examples:

        solcheck check contracts/Wallet.sol

        solcheck check contracts/Wallet.sol --root . --linter solhint
    """
    bootstrap(ctx.settings)

    overrides: dict = {}
    if no_compile:
        overrides["enabled_as_you_type_compilation_error_check"] = False
    if linter is not None:
        overrides["linter"] = linter
    validation = ValidationConfig.model_validate(
        {**ctx.settings.validation.model_dump(), **overrides}
    )

    path = file.resolve()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {file}: {e}") from e

    root_path = str(root.resolve()) if root else None
    document = SourceDocument(uri=path.as_uri(), path=str(path), text=text)
    publisher = CollectingPublisher()
    driver = CompilationDriver.from_settings(ctx.settings, root_path=root_path)
    scheduler = ValidationScheduler(driver, publisher, validation, root_path=root_path)

    asyncio.run(scheduler.on_open(document))

    diagnostics = publisher.diagnostics.get(document.uri, [])
    presenter = resolve(IPresenter)  # type: ignore[type-abstract]
    presenter.print_diagnostics(str(file), diagnostics)

    errors = sum(1 for d in diagnostics if d.severity == DiagnosticSeverity.ERROR)
    warnings = len(diagnostics) - errors
    presenter.print(f"{errors} error(s), {warnings} other diagnostic(s)")
    if errors:
        raise SystemExit(1)
