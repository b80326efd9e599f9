"""
Open document snapshots.
"""

from __future__ import annotations

from ...core.models.source import SourceDocument


class DocumentStore:
    """Latest snapshot of each open document, keyed by uri."""

    def __init__(self) -> None:
        self._documents: dict[str, SourceDocument] = {}

    def put(self, document: SourceDocument) -> None:
        self._documents[document.uri] = document

    def get(self, uri: str) -> SourceDocument | None:
        return self._documents.get(uri)

    def remove(self, uri: str) -> SourceDocument | None:
        return self._documents.pop(uri, None)

    def all(self) -> list[SourceDocument]:
        return list(self._documents.values())

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)
