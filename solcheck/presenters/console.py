"""
Console presenter for terminal output.

Implements human-readable output formatting for the CLI.
"""

import sys

from ..core.interfaces.presenter import IPresenter
from ..core.models.diagnostic import DiagnosticSeverity, EditorDiagnostic

_SEVERITY_LABELS = {
    DiagnosticSeverity.ERROR: ("error", "\033[91m"),
    DiagnosticSeverity.WARNING: ("warning", "\033[93m"),
    DiagnosticSeverity.INFORMATION: ("info", "\033[94m"),
    DiagnosticSeverity.HINT: ("hint", "\033[2m"),
}


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Formats output for human-readable terminal display.
    """

    def __init__(self, use_color: bool = True, file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stdout)
        """
        self._use_color = use_color and sys.stdout.isatty()
        self._file = file or sys.stdout

    def print(self, message: str) -> None:
        print(message, file=self._file)

    def print_table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a formatted table.

        Args:
            headers: Column headers
            rows: Table rows
        """
        if not rows:
            return

        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  ".join(str(h).ljust(widths[i]) for i, h in enumerate(headers))
        if self._use_color:
            print(f"\033[1m{header_line}\033[0m", file=self._file)
        else:
            print(header_line, file=self._file)
        print("-" * len(header_line), file=self._file)

        for row in rows:
            print("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)), file=self._file)

    def print_diagnostics(self, file_path: str, diagnostics: list[EditorDiagnostic]) -> None:
        """
        Print diagnostics in ``file:line:column: severity: message`` form.

        Positions are shown 1-based, the way compilers print them.
        """
        for diagnostic in sorted(diagnostics, key=_position):
            start = diagnostic.range.start
            label, color = _SEVERITY_LABELS.get(
                DiagnosticSeverity(diagnostic.severity), ("info", "")
            )
            if self._use_color:
                label = f"{color}{label}\033[0m"
            print(
                f"{file_path}:{start.line + 1}:{start.character + 1}: {label}: "
                f"{diagnostic.message} [{diagnostic.source}]",
                file=self._file,
            )


def _position(diagnostic: EditorDiagnostic) -> tuple[int, int]:
    return diagnostic.range.start.line, diagnostic.range.start.character
