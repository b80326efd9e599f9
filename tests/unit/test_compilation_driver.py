"""
Unit tests for CompilationDriver.

The toolchain is replaced with AsyncMock components so compiler and linker
behaviour can be scripted per test.
"""

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from solcheck.core.exceptions import ComponentInstallError, ToolchainRunError
from solcheck.core.models.source import CompileJob, ContractSource, SourceDocument
from solcheck.services.compilation import CompilationDriver
from solcheck.services.diagnostics import PosixDiagnosticParser
from solcheck.services.staging import StagingService

ERROR_BLOCK = "\n".join(
    [
        "Error: Undeclared identifier.",
        "  --> ~A.sol:2:5:",
        "   |",
        "2 |     foo();",
        "   |     ^^^",
        "",
    ]
)


@pytest.fixture
def toolchain(tmp_path):
    toolchain = MagicMock()
    toolchain.ensure_installed = AsyncMock()
    toolchain.compiler.run = AsyncMock(return_value="")
    toolchain.linker.run = AsyncMock(return_value="")
    toolchain.stdlib.path.return_value = str(tmp_path / "stdlib_sol.tvm")
    return toolchain


@pytest.fixture
def driver(toolchain):
    d = CompilationDriver(toolchain=toolchain, staging=StagingService(), parser=PosixDiagnosticParser())
    d.logger = MagicMock()
    return d


class TestRunCompilation:
    """Tests for compiling and linking a single file."""

    @pytest.mark.asyncio
    async def test_rejects_unsupported_extension(self, driver, toolchain, tmp_path):
        assert await driver.run_compilation(str(tmp_path / "notes.txt")) == []

        toolchain.ensure_installed.assert_not_awaited()
        toolchain.compiler.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_compiler_and_linker_arguments(self, driver, toolchain, tmp_path):
        source = tmp_path / "~A.tsol"
        source.write_text("contract A {}")

        await driver.run_compilation(str(source))

        toolchain.ensure_installed.assert_awaited_once()
        compiler_args = toolchain.compiler.run.await_args.args
        assert compiler_args[1:] == (str(tmp_path), ["-o", str(tmp_path), "~A.tsol"])
        linker_args = toolchain.linker.run.await_args.args
        assert linker_args[2] == [
            "compile",
            os.path.join(str(tmp_path), "~A.code"),
            "--lib",
            str(tmp_path / "stdlib_sol.tvm"),
        ]

    @pytest.mark.asyncio
    async def test_linked_contract_is_renamed(self, driver, toolchain, tmp_path):
        source = tmp_path / "~A.sol"
        source.write_text("contract A {}")
        (tmp_path / "~A.code").write_text("code")
        (tmp_path / "3f2a.tvc").write_bytes(b"tvc")
        toolchain.linker.run.return_value = "TVM linker 0.14\nSaved contract to file 3f2a.tvc\n"

        await driver.run_compilation(str(source))

        assert (tmp_path / "~A.tvc").read_bytes() == b"tvc"
        assert not (tmp_path / "3f2a.tvc").exists()
        assert not (tmp_path / "~A.code").exists()

    @pytest.mark.asyncio
    async def test_stage_failures_are_swallowed(self, driver, toolchain, tmp_path):
        source = tmp_path / "~A.sol"
        source.write_text("contract A {}")

        async def failing_compile(terminal, cwd, args):
            terminal.write_error(ERROR_BLOCK)
            raise ToolchainRunError("solc failed", exit_code=1, output=ERROR_BLOCK)

        toolchain.compiler.run.side_effect = failing_compile
        toolchain.linker.run.side_effect = ToolchainRunError("no code file", exit_code=1)

        output = await driver.run_compilation(str(source))

        assert output == [ERROR_BLOCK]
        toolchain.linker.run.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_install_errors_propagate(self, driver, toolchain, tmp_path):
        toolchain.ensure_installed.side_effect = ComponentInstallError("offline")

        with pytest.raises(ComponentInstallError):
            await driver.run_compilation(str(tmp_path / "~A.sol"))


class TestCompile:
    """Tests for compiling jobs."""

    @pytest.mark.asyncio
    async def test_compile_stages_and_parses(self, driver, toolchain, project):
        async def compile_with_error(terminal, cwd, args):
            terminal.write_error(ERROR_BLOCK)
            raise ToolchainRunError("solc failed", exit_code=1)

        toolchain.compiler.run.side_effect = compile_with_error
        source = str(project / "contracts" / "A.sol")

        diagnostics = await driver.compile(CompileJob.single(source, "contract A { function f() { foo(); } }"))

        assert (project / ".temp" / "~A.sol").exists()
        assert toolchain.compiler.run.await_args.args[1] == str(project / ".temp")
        assert len(diagnostics) == 1
        assert diagnostics[0].file == "A.sol"
        assert diagnostics[0].line == 2

    @pytest.mark.asyncio
    async def test_install_progress_stays_out_of_diagnostics(self, driver, toolchain, project):
        async def install(terminal):
            terminal.log("Downloading solc 0.66.0 from https://binaries.tonlabs.io/solc_0_66_0_linux.gz")

        async def compile_with_error(terminal, cwd, args):
            terminal.write_error(ERROR_BLOCK)

        toolchain.ensure_installed.side_effect = install
        toolchain.compiler.run.side_effect = compile_with_error
        source = str(project / "contracts" / "A.sol")

        [diagnostic] = await driver.compile(CompileJob.single(source, "contract A {}"))

        assert diagnostic.severity == "Error"
        assert diagnostic.message == "Undeclared identifier."

    @pytest.mark.asyncio
    async def test_diagnostics_from_every_source_are_kept(self, driver, toolchain, project):
        async def compile_with_error(terminal, cwd, args):
            name = args[-1]
            terminal.write_error(ERROR_BLOCK.replace("~A.sol", name))

        toolchain.compiler.run.side_effect = compile_with_error
        a_path = str(project / "contracts" / "A.sol")
        b_path = str(project / "contracts" / "B.sol")
        job = CompileJob(
            sources={
                a_path: ContractSource(file_path=a_path, content="contract A {}"),
                b_path: ContractSource(file_path=b_path, content="contract B {}"),
            }
        )

        diagnostics = await driver.compile(job)

        assert [d.file for d in diagnostics] == ["A.sol", "B.sol"]
        assert all(d.severity == "Error" for d in diagnostics)

    @pytest.mark.asyncio
    async def test_clean_compile_has_no_diagnostics(self, driver, project):
        source = str(project / "contracts" / "A.sol")

        assert await driver.compile(CompileJob.single(source, "contract A {}")) == []


class TestCompileDocument:
    """Tests for compile_document."""

    @pytest.mark.asyncio
    async def test_without_root_compiles_single_file(self, driver, project):
        resolver = MagicMock()
        driver.import_resolver = resolver
        driver.compile = AsyncMock(return_value=[])
        path = str(project / "contracts" / "A.sol")
        document = SourceDocument(uri=Path(path).as_uri(), path=path, text="contract A {}")

        await driver.compile_document(document)

        resolver.resolve.assert_not_called()
        job = driver.compile.await_args.args[0]
        assert list(job.sources) == [path]

    @pytest.mark.asyncio
    async def test_with_root_uses_import_resolver(self, driver, toolchain, project):
        path = str(project / "contracts" / "A.sol")
        resolver = MagicMock()
        resolver.resolve.return_value = CompileJob.single(path, "contract A {}")
        driver.import_resolver = resolver

        async def compile_with_error(terminal, cwd, args):
            terminal.write_error(ERROR_BLOCK)

        toolchain.compiler.run.side_effect = compile_with_error
        document = SourceDocument(uri=Path(path).as_uri(), path=path, text="contract A {}")

        errors = await driver.compile_document(document, str(project), "lib", "src")

        resolver.resolve.assert_called_once_with(path, "contract A {}", str(project), "lib", "src")
        assert [e.file_name for e in errors] == ["A.sol"]
        assert errors[0].diagnostic.range.start.line == 1
