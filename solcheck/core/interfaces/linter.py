"""
Linter interface definitions.

Linters are pluggable strategies selected by the ``linter`` setting.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models.diagnostic import EditorDiagnostic


class ILinter(ABC):
    """
    Interface for lint-rule engines.

    Implementations run an external linter over the in-memory text of a
    document and report editor diagnostics.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the linter name used in configuration (e.g., 'solhint')."""
        pass

    @abstractmethod
    def validate(self, file_path: str, text: str) -> list[EditorDiagnostic]:
        """
        Lint a document.

        Args:
            file_path: Path of the document on disk
            text: Current (possibly unsaved) document text

        Returns:
            Diagnostics in editor coordinates
        """
        pass

    @abstractmethod
    def set_ide_rules(self, rules: dict[str, Any] | None) -> None:
        """
        Override rules with the ones configured in the editor.

        Args:
            rules: Opaque rule mapping passed through to the linter
        """
        pass
