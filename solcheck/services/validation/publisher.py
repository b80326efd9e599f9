"""
In-process diagnostic publisher.
"""

from __future__ import annotations

from ...core.models.diagnostic import EditorDiagnostic


class CollectingPublisher:
    """Keeps the last published diagnostic set per uri."""

    def __init__(self) -> None:
        self.diagnostics: dict[str, list[EditorDiagnostic]] = {}

    def publish(self, uri: str, diagnostics: list[EditorDiagnostic]) -> None:
        self.diagnostics[uri] = list(diagnostics)
