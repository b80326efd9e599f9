"""
Diagnostic parser: compiler output to editor diagnostics.
"""

from .convert import to_compiler_error, to_editor_diagnostic
from .parser import (
    DiagnosticParser,
    LayoutConvention,
    PosixDiagnosticParser,
    WindowsDiagnosticParser,
    select_parser,
)

__all__ = [
    "DiagnosticParser",
    "LayoutConvention",
    "PosixDiagnosticParser",
    "WindowsDiagnosticParser",
    "select_parser",
    "to_compiler_error",
    "to_editor_diagnostic",
]
