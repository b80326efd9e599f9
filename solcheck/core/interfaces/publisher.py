"""
Diagnostic publishing protocol.

The editor transport receives one complete diagnostic set per document.
"""

from typing import Protocol, runtime_checkable

from ..models.diagnostic import EditorDiagnostic


@runtime_checkable
class IDiagnosticPublisher(Protocol):
    """Protocol for sending diagnostics to the editor."""

    def publish(self, uri: str, diagnostics: list[EditorDiagnostic]) -> None:
        """Replace the diagnostics shown for ``uri``."""
        ...
