"""
Protocol definitions for solcheck's service interfaces.

These protocols define the contracts that implementations must follow,
enabling dependency inversion and loose coupling throughout the codebase.
"""

from .imports import IImportResolver
from .linter import ILinter
from .logger import ILogger
from .presenter import IPresenter
from .publisher import IDiagnosticPublisher
from .terminal import ITerminal

__all__ = [
    "IDiagnosticPublisher",
    "IImportResolver",
    "ILinter",
    "ILogger",
    "IPresenter",
    "ITerminal",
]
