"""
Diagnostic models.

``Diagnostic`` is what the toolchain output parser produces; ``EditorDiagnostic``
is the zero-based editor-protocol shape that gets published.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated

from pydantic import Field

from .base import ImmutableModel


class DiagnosticSeverity(IntEnum):
    """Editor protocol severity codes."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4

    @classmethod
    def from_label(cls, label: str) -> DiagnosticSeverity:
        """Map a toolchain severity label such as ``Error`` or ``Warning``."""
        normalized = label.strip().lower()
        if normalized == "error":
            return cls.ERROR
        if normalized == "warning":
            return cls.WARNING
        return cls.INFORMATION


class Diagnostic(ImmutableModel):
    """A diagnostic recovered from compiler output.

    ``file`` is the bare display filename, ``path`` the filename resolved
    against the original (un-staged) directory. ``line`` and ``column`` are
    1-based as printed by the toolchain; ``length`` is the caret count of the
    underline.
    """

    severity: str
    message: str
    file: str
    path: str
    line: Annotated[int, Field(ge=0)]
    column: Annotated[int, Field(ge=0)]
    length: Annotated[int, Field(ge=0)] = 0


class Position(ImmutableModel):
    line: Annotated[int, Field(ge=0)]
    character: Annotated[int, Field(ge=0)]


class Range(ImmutableModel):
    start: Position
    end: Position


class EditorDiagnostic(ImmutableModel):
    """Diagnostic in the editor protocol shape."""

    range: Range
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    message: str
    source: str = "solc"
    code: str | None = None

    @classmethod
    def at(
        cls,
        line: int,
        character: int,
        length: int,
        message: str,
        severity: DiagnosticSeverity = DiagnosticSeverity.ERROR,
        source: str = "solc",
        code: str | None = None,
    ) -> EditorDiagnostic:
        """Build a single-line diagnostic from zero-based coordinates."""
        line = max(line, 0)
        character = max(character, 0)
        return cls(
            range=Range(
                start=Position(line=line, character=character),
                end=Position(line=line, character=character + max(length, 0)),
            ),
            severity=severity,
            message=message,
            source=source,
            code=code,
        )


class CompilerError(ImmutableModel):
    """A converted compiler diagnostic paired with the file it belongs to."""

    file_name: str
    diagnostic: EditorDiagnostic
