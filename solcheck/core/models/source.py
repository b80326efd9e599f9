"""
Source domain models.

Snapshots of editor documents and the compile jobs built from them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field

from .base import ImmutableModel


class SourceDocument(ImmutableModel):
    """Immutable snapshot of an open editor document."""

    uri: Annotated[str, Field(min_length=1)]
    path: Annotated[str, Field(min_length=1)]
    text: str
    version: int | None = None

    @property
    def basename(self) -> str:
        return Path(self.path).name


class ContractSource(ImmutableModel):
    """One file needed for a compile."""

    file_path: Annotated[str, Field(min_length=1)]
    content: str


class CompileJob(ImmutableModel):
    """All sources of one validation cycle, keyed by file path."""

    sources: dict[str, ContractSource] = Field(default_factory=dict)

    @classmethod
    def single(cls, file_path: str, content: str) -> CompileJob:
        """Job for a lone document with no resolved imports."""
        return cls(sources={file_path: ContractSource(file_path=file_path, content=content)})

    def __len__(self) -> int:
        return len(self.sources)


class StagedFile(ImmutableModel):
    """A source mirrored into the temp tree."""

    source_path: str
    staged_path: str


class Artifact(ImmutableModel):
    """Build outputs promoted out of the temp tree.

    Any path is None when the corresponding file was not produced.
    """

    bytecode_path: str | None = None
    abi_path: str | None = None
    base64_path: str | None = None

    @property
    def promoted(self) -> bool:
        return self.bytecode_path is not None or self.abi_path is not None
