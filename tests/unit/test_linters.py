"""
Unit tests for the solhint and solium linter strategies.
"""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from solcheck.core.exceptions import LinterError
from solcheck.core.models.diagnostic import DiagnosticSeverity
from solcheck.plugins.linters import SolhintLinter, SoliumLinter


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestSolhintLinter:
    """Tests for SolhintLinter."""

    def test_name(self):
        assert SolhintLinter().name == "solhint"

    def test_command(self):
        assert SolhintLinter().command("/p/contracts/A.sol", None) == [
            "solhint",
            "stdin",
            "--filename",
            "/p/contracts/A.sol",
            "--formatter",
            "json",
        ]

    def test_parse_json_report(self):
        report = json.dumps(
            [
                {
                    "line": 4,
                    "column": 9,
                    "severity": "Error",
                    "message": "Use double quotes for string literals",
                    "ruleId": "quotes",
                },
                {"line": 7, "column": 1, "severity": 1, "message": "Line too long", "ruleId": "max-line-length"},
                {"conclusion": "2 problems"},
            ]
        )

        diagnostics = SolhintLinter().parse_output(report, "/p/contracts/A.sol")

        assert len(diagnostics) == 2
        first, second = diagnostics
        assert first.range.start.line == 3
        assert first.range.start.character == 8
        assert first.severity == DiagnosticSeverity.ERROR
        assert first.source == "solhint"
        assert first.code == "quotes"
        assert first.message == "Use double quotes for string literals [quotes]"
        assert second.severity == DiagnosticSeverity.WARNING

    def test_empty_output(self):
        assert SolhintLinter().parse_output("", "A.sol") == []

    def test_unreadable_report_raises(self):
        with pytest.raises(LinterError):
            SolhintLinter().parse_output("not json", "A.sol")

    def test_validate_feeds_text_on_stdin(self):
        linter = SolhintLinter("/p")
        with patch("subprocess.run", return_value=completed("[]")) as mock_run:
            assert linter.validate("/p/contracts/A.sol", "contract A {}") == []

        kwargs = mock_run.call_args.kwargs
        assert kwargs["input"] == "contract A {}"
        assert kwargs["cwd"] == "/p"

    def test_ide_rules_are_passed_as_config(self):
        linter = SolhintLinter("/p")
        linter.set_ide_rules({"quotes": ["error", "double"]})
        seen = {}

        def fake_run(cmd, **kwargs):
            config_path = cmd[cmd.index("--config") + 1]
            with open(config_path) as f:
                seen["config"] = json.load(f)
            return completed("[]")

        with patch("subprocess.run", side_effect=fake_run):
            linter.validate("/p/contracts/A.sol", "contract A {}")

        assert seen["config"] == {"rules": {"quotes": ["error", "double"]}}

    def test_missing_binary_raises_linter_error(self):
        linter = SolhintLinter("/p")
        linter.logger = MagicMock()
        with patch("subprocess.run", side_effect=FileNotFoundError("solhint")):
            with pytest.raises(LinterError):
                linter.validate("/p/contracts/A.sol", "contract A {}")


class TestSoliumLinter:
    """Tests for SoliumLinter."""

    def test_command(self):
        assert SoliumLinter().command("A.sol", None) == ["solium", "--stdin", "--reporter", "gcc"]

    def test_parse_gcc_report(self):
        output = "\n".join(
            [
                "stdin:3:4: error: Only use indent of 4 spaces.",
                "stdin:10:0: warning: Avoid using 'now'.",
                "",
                "2 issues found",
            ]
        )

        diagnostics = SoliumLinter().parse_output(output, "A.sol")

        assert [(d.range.start.line, d.range.start.character) for d in diagnostics] == [(2, 4), (9, 0)]
        assert [d.severity for d in diagnostics] == [DiagnosticSeverity.ERROR, DiagnosticSeverity.WARNING]
        assert diagnostics[1].message == "Avoid using 'now'."

    def test_rules_config_extends_recommended(self):
        linter = SoliumLinter()
        linter.set_ide_rules({"quotes": ["error", "double"]})

        assert linter.config_document() == {
            "extends": "solium:recommended",
            "rules": {"quotes": ["error", "double"]},
        }
