"""
Solium (Ethlint) linter.
"""

from __future__ import annotations

import re
from typing import Any

from ...core.models.diagnostic import DiagnosticSeverity, EditorDiagnostic
from .base import BaseLinter

# <file>:<line>:<column>: <severity>: <message>
_GCC_LINE_RE = re.compile(r"^(?P<file>.*?):(?P<line>\d+):(?P<column>\d+):\s*(?P<severity>\w+):\s*(?P<message>.*)$")


class SoliumLinter(BaseLinter):
    """Runs ``solium --stdin`` with the gcc reporter."""

    linter_name = "solium"

    def command(self, file_path: str, config_path: str | None) -> list[str]:
        cmd = ["solium", "--stdin", "--reporter", "gcc"]
        if config_path:
            cmd += ["--config", config_path]
        return cmd

    def config_document(self) -> dict[str, Any]:
        return {"extends": "solium:recommended", "rules": self.rules}

    def parse_output(self, output: str, file_path: str) -> list[EditorDiagnostic]:
        diagnostics = []
        for line in output.splitlines():
            match = _GCC_LINE_RE.match(line.strip())
            if not match:
                continue
            diagnostics.append(
                EditorDiagnostic.at(
                    line=int(match.group("line")) - 1,
                    character=int(match.group("column")),
                    length=0,
                    message=match.group("message"),
                    severity=DiagnosticSeverity.from_label(match.group("severity")),
                    source=self.name,
                )
            )
        return diagnostics
