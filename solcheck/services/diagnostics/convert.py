"""
Conversion of parsed diagnostics into the editor protocol shape.
"""

from __future__ import annotations

from ...core.models.diagnostic import (
    CompilerError,
    Diagnostic,
    DiagnosticSeverity,
    EditorDiagnostic,
)

COMPILER_SOURCE = "solc"


def to_editor_diagnostic(diagnostic: Diagnostic, source: str = COMPILER_SOURCE) -> EditorDiagnostic:
    """Convert 1-based toolchain coordinates to a zero-based editor range."""
    return EditorDiagnostic.at(
        line=diagnostic.line - 1,
        character=diagnostic.column - 1,
        length=diagnostic.length,
        message=diagnostic.message,
        severity=DiagnosticSeverity.from_label(diagnostic.severity),
        source=source,
    )


def to_compiler_error(diagnostic: Diagnostic) -> CompilerError:
    return CompilerError(file_name=diagnostic.file, diagnostic=to_editor_diagnostic(diagnostic))
