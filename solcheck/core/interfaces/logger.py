"""
Logger interface for the server's own trace.

Problems found in contracts reach the user as diagnostics through
IDiagnosticPublisher, and CLI output goes through IPresenter. ILogger records
what the pipeline itself did: staging, toolchain installs, compile passes.

Keyword arguments other than ``exc_info`` are context fields, such as the
document uri or the staged file, and are rendered after the message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

LEVELS = ("debug", "info", "warning", "error")


class ILogger(ABC):
    """Interface for internal logging."""

    @abstractmethod
    def log(self, level: str, message: str, *args: Any, **context: Any) -> None:
        """
        Record ``message % args``.

        Args:
            level: One of ``LEVELS``
            message: %-style format string
            context: Context fields attached to the record
        """

    @abstractmethod
    def child(self, name: str) -> ILogger:
        """Logger for one component, writing to the same destinations."""

    def debug(self, message: str, *args: Any, **context: Any) -> None:
        self.log("debug", message, *args, **context)

    def info(self, message: str, *args: Any, **context: Any) -> None:
        self.log("info", message, *args, **context)

    def warning(self, message: str, *args: Any, **context: Any) -> None:
        self.log("warning", message, *args, **context)

    def error(self, message: str, *args: Any, **context: Any) -> None:
        self.log("error", message, *args, **context)
