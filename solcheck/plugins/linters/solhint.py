"""
Solhint linter.
"""

from __future__ import annotations

import json

from ...core.exceptions import LinterError
from ...core.models.diagnostic import DiagnosticSeverity, EditorDiagnostic
from .base import BaseLinter

# Numeric severities used by solhint's JSON reporter.
_NUMERIC_SEVERITY = {2: DiagnosticSeverity.ERROR, 1: DiagnosticSeverity.WARNING}


class SolhintLinter(BaseLinter):
    """Runs ``solhint stdin`` with the JSON formatter."""

    linter_name = "solhint"

    def command(self, file_path: str, config_path: str | None) -> list[str]:
        cmd = ["solhint", "stdin", "--filename", file_path, "--formatter", "json"]
        if config_path:
            cmd += ["--config", config_path]
        return cmd

    def parse_output(self, output: str, file_path: str) -> list[EditorDiagnostic]:
        if not output.strip():
            return []
        try:
            reports = json.loads(output)
        except ValueError as e:
            raise LinterError("Unreadable solhint report", linter=self.name, cause=e) from e

        diagnostics = []
        for report in reports if isinstance(reports, list) else []:
            if not isinstance(report, dict) or "line" not in report:
                continue
            message = report.get("message", "")
            rule = report.get("ruleId")
            diagnostics.append(
                EditorDiagnostic.at(
                    line=int(report["line"]) - 1,
                    character=int(report.get("column") or 1) - 1,
                    length=0,
                    message=f"{message} [{rule}]" if rule else message,
                    severity=self._severity(report.get("severity")),
                    source=self.name,
                    code=rule,
                )
            )
        return diagnostics

    @staticmethod
    def _severity(value) -> DiagnosticSeverity:
        if isinstance(value, int):
            return _NUMERIC_SEVERITY.get(value, DiagnosticSeverity.INFORMATION)
        return DiagnosticSeverity.from_label(str(value or ""))
