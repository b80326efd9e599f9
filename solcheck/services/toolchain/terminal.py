"""
Terminal sinks for toolchain output.
"""

from __future__ import annotations

from typing import Any


class CapturingTerminal:
    """
    Terminal that keeps every write as one ordered block.

    ``log`` lines end with a newline; ``write`` and ``write_error`` keep the
    text exactly as the tool printed it.

    A fresh terminal is created per invocation so captured output is a value
    handed back to the caller rather than shared state.
    """

    def __init__(self) -> None:
        self.output: list[str] = []

    def log(self, *args: Any) -> None:
        self.output.append("".join(f"{arg}" for arg in args) + "\n")

    def write(self, text: str) -> None:
        self.output.append(text)

    def write_error(self, text: str) -> None:
        self.output.append(text)

    def text(self) -> str:
        """All captured blocks joined together."""
        return "".join(self.output)
