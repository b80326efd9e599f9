"""
Import resolution protocol.

Produces the set of sources one compile needs.
"""

from typing import Protocol, runtime_checkable

from ..models.source import CompileJob


@runtime_checkable
class IImportResolver(Protocol):
    """Protocol for resolving a document's import graph."""

    def resolve(
        self,
        file_path: str,
        text: str,
        root_path: str,
        dependencies_dir: str,
        dependencies_contracts_dir: str,
    ) -> CompileJob:
        """Return the document plus every transitively imported source."""
        ...
