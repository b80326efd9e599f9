"""
Pydantic models for solcheck.

This package provides typed, validated models for all solcheck data structures.
All models use Pydantic v2 with strict validation.
"""

from .base import ImmutableModel, SolcheckBaseModel
from .config import (
    LayoutConfig,
    LoggingConfig,
    SolcheckConfig,
    ToolchainConfig,
    ValidationConfig,
)
from .diagnostic import (
    CompilerError,
    Diagnostic,
    DiagnosticSeverity,
    EditorDiagnostic,
    Position,
    Range,
)
from .source import Artifact, CompileJob, ContractSource, SourceDocument, StagedFile
from .toolchain import ComponentInfo
from .validation import ValidationPhase, ValidationState

__all__ = [
    "Artifact",
    "CompileJob",
    "CompilerError",
    "ComponentInfo",
    "ContractSource",
    "Diagnostic",
    "DiagnosticSeverity",
    "EditorDiagnostic",
    "ImmutableModel",
    "LayoutConfig",
    "LoggingConfig",
    "Position",
    "Range",
    "SolcheckBaseModel",
    "SolcheckConfig",
    "SourceDocument",
    "StagedFile",
    "ToolchainConfig",
    "ValidationConfig",
    "ValidationPhase",
    "ValidationState",
]
