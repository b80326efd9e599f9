"""
Presenter interface definitions for output formatting.

Enables pluggable output formats (console, JSON, etc.)
following the Interface Segregation Principle.
"""

from abc import ABC, abstractmethod

from ..models.diagnostic import EditorDiagnostic


class IPresenter(ABC):
    """
    Interface for output presentation.

    Implementations handle formatting and displaying output
    to the user in various formats (console, JSON, etc.).
    """

    @abstractmethod
    def print(self, message: str) -> None:
        """Print a message to output."""
        pass

    @abstractmethod
    def print_table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a table.

        Args:
            headers: Column headers
            rows: Table rows (list of row values)
        """
        pass

    @abstractmethod
    def print_diagnostics(self, file_path: str, diagnostics: list[EditorDiagnostic]) -> None:
        """
        Print diagnostics for one file.

        Args:
            file_path: File the diagnostics belong to
            diagnostics: Diagnostics in editor coordinates
        """
        pass
