"""
Unit tests for the solcheck CLI commands.

Commands run through Click's CliRunner inside a temporary project; the
compilation driver is patched where a toolchain would be needed.
"""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from solcheck.cli import cli
from solcheck.core.models.diagnostic import CompilerError, DiagnosticSeverity, EditorDiagnostic
from solcheck.services.compilation import CompilationDriver


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace(project, monkeypatch):
    monkeypatch.chdir(project)
    monkeypatch.setenv("SOLCHECK_TOOLCHAIN__HOME", str(project / "toolchain"))
    (project / "contracts" / "A.sol").write_text("contract A { function f() public { foo(); } }\n")
    return project


class TestCheck:
    """Tests for 'solcheck check'."""

    def test_clean_file_exits_zero(self, runner, workspace):
        result = runner.invoke(cli, ["check", "contracts/A.sol", "--no-compile", "--linter", "none"])

        assert result.exit_code == 0, result.output
        assert "0 error(s)" in result.output

    def test_compiler_errors_exit_one(self, runner, workspace):
        errors = [
            CompilerError(
                file_name="A.sol",
                diagnostic=EditorDiagnostic.at(0, 35, 3, "Undeclared identifier."),
            ),
            CompilerError(
                file_name="A.sol",
                diagnostic=EditorDiagnostic.at(
                    0, 0, 1, "Unused variable.", severity=DiagnosticSeverity.WARNING
                ),
            ),
        ]
        with patch.object(CompilationDriver, "compile_document", new=AsyncMock(return_value=errors)):
            result = runner.invoke(cli, ["check", "contracts/A.sol", "--linter", "none"])

        assert result.exit_code == 1
        assert "contracts/A.sol:1:36: error: Undeclared identifier. [solc]" in result.output
        assert "contracts/A.sol:1:1: warning: Unused variable. [solc]" in result.output
        assert "1 error(s), 1 other diagnostic(s)" in result.output

    def test_missing_file_is_usage_error(self, runner, workspace):
        result = runner.invoke(cli, ["check", "contracts/Missing.sol"])

        assert result.exit_code == 2


class TestPromote:
    """Tests for 'solcheck promote'."""

    def test_promotes_staged_artifacts(self, runner, workspace):
        temp = workspace / ".temp"
        temp.mkdir()
        (temp / "~A.sol").write_text("contract A {}")
        (temp / "~A.tvc").write_bytes(b"tvc")

        result = runner.invoke(cli, ["promote", "contracts/A.sol"])

        assert result.exit_code == 0, result.output
        assert "Bytecode:" in result.output
        assert (workspace / "build" / "A.tvc").read_bytes() == b"tvc"
        assert (workspace / "build" / "A.base64").exists()
        assert not (temp / "~A.sol").exists()

    def test_nothing_to_promote(self, runner, workspace):
        result = runner.invoke(cli, ["promote", "contracts/A.sol"])

        assert result.exit_code == 0
        assert "Nothing to promote." in result.output


class TestToolchainInfo:
    def test_lists_components(self, runner, workspace):
        result = runner.invoke(cli, ["toolchain", "info"])

        assert result.exit_code == 0, result.output
        for name in ("solc", "tvm_linker", "stdlib_sol"):
            assert name in result.output
        assert str(workspace / "toolchain" / "solidity") in result.output


class TestConfigCommand:
    """Tests for 'solcheck config'."""

    def test_set_and_get(self, runner, workspace):
        result = runner.invoke(cli, ["config", "set", "validation.linter", "solium"])
        assert result.exit_code == 0, result.output
        assert "Set validation.linter = solium" in result.output

        result = runner.invoke(cli, ["config", "get", "validation.linter"])
        assert "validation.linter: solium" in result.output

    def test_invalid_value(self, runner, workspace):
        result = runner.invoke(cli, ["config", "set", "validation.validation_delay", "later"])

        assert result.exit_code == 1
        assert "Invalid integer value" in result.output

    def test_list(self, runner, workspace):
        result = runner.invoke(cli, ["config", "list"])

        assert "validation.package_default_dependencies_directory" in result.output

    def test_list_marks_changed_values(self, runner, workspace):
        runner.invoke(cli, ["config", "set", "validation.validation_delay", "800"])

        result = runner.invoke(cli, ["config", "list"])

        assert "validation.validation_delay = 800  (changed)" in result.output
        assert str(workspace / ".solcheck" / "config.toml") in result.output

    def test_get_unknown_key(self, runner, workspace):
        result = runner.invoke(cli, ["config", "get", "validation.colour"])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output


def test_help_without_subcommand(runner):
    result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "check" in result.output


def test_unreadable_config_file_is_reported(runner, workspace):
    (workspace / ".solcheck").mkdir()
    (workspace / ".solcheck" / "config.toml").write_text("[validation\nlinter = ")

    result = runner.invoke(cli, ["toolchain", "info"])

    assert result.exit_code == 1
    assert "Failed to parse config file" in result.output
