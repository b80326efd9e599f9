"""
Terminal sink protocol.

Every toolchain invocation writes its output through a terminal.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ITerminal(Protocol):
    """Protocol for capturing toolchain output."""

    def log(self, *args: Any) -> None:
        """Write an informational line."""
        ...

    def write(self, text: str) -> None:
        """Write standard output text."""
        ...

    def write_error(self, text: str) -> None:
        """Write standard error text."""
        ...
