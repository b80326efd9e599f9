"""
Compilation driver.

Stages a compile job into the temp tree, runs the compiler and the linker
on every staged file, and turns the collected output into diagnostics.
"""

from __future__ import annotations

import asyncio
import os
import re

from ...core.exceptions import ToolchainError
from ...core.interfaces.imports import IImportResolver
from ...core.interfaces.terminal import ITerminal
from ...core.models.diagnostic import CompilerError, Diagnostic
from ...core.models.source import CompileJob, SourceDocument
from ..diagnostics import DiagnosticParser, select_parser, to_compiler_error
from ..imports import ImportResolver
from ..logging import component_logger
from ..staging import StagingService
from ..staging.paths import BYTECODE_SUFFIX, CODE_SUFFIX, replace_extension
from ..toolchain import CapturingTerminal, Toolchain, toolchain_components

SOURCE_EXTENSIONS = (".sol", ".tsol")

_SAVED_CONTRACT_RE = re.compile(r"Saved contract to file (.*)$", re.MULTILINE)


class CompilationDriver:
    """
    Runs the toolchain over compile jobs.

    Usage:
        driver = CompilationDriver(toolchain_components(), StagingService())
        diagnostics = await driver.compile(CompileJob.single(path, text))
    """

    logger = component_logger()

    def __init__(
        self,
        toolchain: Toolchain | None = None,
        staging: StagingService | None = None,
        parser: DiagnosticParser | None = None,
        import_resolver: IImportResolver | None = None,
        root_path: str | None = None,
    ) -> None:
        self.toolchain = toolchain or toolchain_components()
        self.staging = staging or StagingService()
        self.parser = parser or select_parser(mapper=self.staging.mapper)
        self.import_resolver = import_resolver
        self.root_path = root_path

    @classmethod
    def from_settings(cls, settings, root_path: str | None = None) -> CompilationDriver:
        """Build a driver wired from ``SolcheckSettings``."""
        staging = StagingService.from_config(settings.layout, settings.validation)
        return cls(
            toolchain=toolchain_components(settings.toolchain),
            staging=staging,
            import_resolver=ImportResolver(),
            root_path=root_path,
        )

    # -------------------------------------------------------------------------
    # Single file
    # -------------------------------------------------------------------------

    async def run_compilation(
        self,
        file: str,
        output_dir: str | None = None,
        terminal: ITerminal | None = None,
    ) -> list[str]:
        """
        Compile and link one file.

        Compiler and linker failures are not raised: whatever they printed
        is part of the returned output.

        Args:
            file: Source file, usually a staged copy
            output_dir: Where artifacts go (defaults to the file's directory)
            terminal: Sink for toolchain output (defaults to a fresh one)

        Returns:
            Output blocks written during this invocation
        """
        terminal = terminal or CapturingTerminal()
        file_dir, file_name = os.path.split(file)
        _stem, ext = os.path.splitext(file_name)
        if ext not in SOURCE_EXTENSIONS:
            terminal.log("Choose TON solidity source file (.tsol or .sol).")
            self.logger.info("Not compiling: unsupported extension", file=file)
            return []

        await self.toolchain.ensure_installed(terminal)

        file_dir = file_dir or "."
        output_dir = os.path.abspath(output_dir or file_dir)
        tvc_path = os.path.join(output_dir, replace_extension(file_name, BYTECODE_SUFFIX))
        code_path = os.path.join(output_dir, replace_extension(file_name, CODE_SUFFIX))

        try:
            await self.toolchain.compiler.run(terminal, file_dir, ["-o", output_dir, file_name])
        except ToolchainError as e:
            self.logger.debug("Compiler failed: %s", e, file=file)

        try:
            linker_out = await self.toolchain.linker.run(
                terminal,
                file_dir,
                ["compile", code_path, "--lib", self.toolchain.stdlib.path()],
            )
            match = _SAVED_CONTRACT_RE.search(linker_out)
            if match is None:
                self.logger.debug("Linker did not report a contract", file=file)
            else:
                generated = os.path.join(file_dir, match.group(1).strip())
                os.replace(generated, tvc_path)
                os.unlink(code_path)
        except (ToolchainError, OSError) as e:
            self.logger.debug("Linking failed: %s", e, file=file)

        return getattr(terminal, "output", [])

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    async def compile(self, job: CompileJob) -> list[Diagnostic]:
        """Stage and compile every source of ``job``, returning parsed diagnostics."""
        output: list[str] = []
        for source in job.sources.values():
            staged = await asyncio.to_thread(self.staging.stage_source, source)
            if staged is None:
                continue
            output.extend(await self.run_compilation(staged.staged_path))

        diagnostics = self.parser.parse(output)
        self.logger.debug("Compiled %d source(s): %d diagnostic(s)", len(job), len(diagnostics))
        return diagnostics

    async def compile_document(
        self,
        document: SourceDocument,
        root_path: str | None = None,
        dependencies_dir: str = "lib",
        dependencies_contracts_dir: str = "src",
    ) -> list[CompilerError]:
        """Compile an editor document together with the sources it imports."""
        root_path = root_path or self.root_path
        if root_path and self.import_resolver is not None:
            job = await asyncio.to_thread(
                self.import_resolver.resolve,
                document.path,
                document.text,
                root_path,
                dependencies_dir,
                dependencies_contracts_dir,
            )
        else:
            job = CompileJob.single(document.path, document.text)

        return [to_compiler_error(d) for d in await self.compile(job)]
