"""
Staging service.

Mirrors compile-job sources into the temp tree before a compile and
promotes build outputs into the build tree once the editor saves or closes
the document. Filesystem failures are logged and swallowed: a partial
stage is preferable to aborting a validation pass.
"""

from __future__ import annotations

import base64
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from ...core.models.config import LayoutConfig, ValidationConfig
from ...core.models.source import Artifact, CompileJob, ContractSource, StagedFile
from ..logging import component_logger
from .imports import DEFAULT_DEPENDENCY_MARKERS, rewrite_imports
from .paths import (
    ABI_SUFFIX,
    BASE64_SUFFIX,
    BYTECODE_SUFFIX,
    PathMapper,
    replace_extension,
    split_path,
)


class StagingService:
    """
    Writes transient copies of sources and recovers their artifacts.

    Usage:
        staging = StagingService(PathMapper())
        staged = staging.stage(job)
        ...
        artifact = staging.promote("/project/contracts/Token.sol")
    """

    logger = component_logger()

    def __init__(
        self,
        mapper: PathMapper | None = None,
        dependency_markers: Iterable[str] = DEFAULT_DEPENDENCY_MARKERS,
    ) -> None:
        self.mapper = mapper or PathMapper()
        self.dependency_markers = tuple(dependency_markers)

    @classmethod
    def from_config(cls, layout: LayoutConfig, validation: ValidationConfig) -> StagingService:
        """Build a staging service honouring the configured directories."""
        markers = list(DEFAULT_DEPENDENCY_MARKERS)
        deps_dir = validation.package_default_dependencies_directory
        if deps_dir and deps_dir not in markers:
            markers.append(deps_dir)
        return cls(PathMapper.from_layout(layout), markers)

    # -------------------------------------------------------------------------
    # Staging
    # -------------------------------------------------------------------------

    def stage_source(self, source: ContractSource) -> StagedFile | None:
        """
        Write the transient copy of one source.

        Returns:
            The staged file, or None if the source is itself transient or
            could not be written.
        """
        _directory, name = split_path(source.file_path)
        if self.mapper.is_transient(name):
            self.logger.debug("Skipping transient source %s", source.file_path)
            return None

        staged_path = self.mapper.staged_path(source.file_path)
        content = rewrite_imports(source.content, self.mapper.marker, self.dependency_markers)

        try:
            Path(staged_path).parent.mkdir(parents=True, exist_ok=True)
            Path(staged_path).write_text(content, encoding="utf-8")
        except OSError as e:
            self.logger.warning("Failed to stage %s at %s: %s", source.file_path, staged_path, e)
            return None

        self.logger.debug("Staged %s -> %s", source.file_path, staged_path)
        return StagedFile(source_path=source.file_path, staged_path=staged_path)

    def stage(self, job: CompileJob) -> list[StagedFile]:
        """Stage every non-transient source of a job."""
        staged = []
        for source in job.sources.values():
            staged_file = self.stage_source(source)
            if staged_file is not None:
                staged.append(staged_file)
        return staged

    # -------------------------------------------------------------------------
    # Promotion and cleanup
    # -------------------------------------------------------------------------

    def promote(self, file_path: str) -> Artifact:
        """
        Move build outputs of ``file_path`` into the build tree and drop its
        staged copy.

        The base64 transport file is regenerated from the promoted bytecode
        every time.
        """
        staged_source = self.mapper.staged_path(file_path)
        staged_bytecode = replace_extension(staged_source, BYTECODE_SUFFIX)
        staged_abi = replace_extension(staged_source, ABI_SUFFIX)

        bytecode_path = None
        base64_path = None
        abi_path = None

        if os.path.exists(staged_bytecode):
            target = self.mapper.build_path(file_path, BYTECODE_SUFFIX)
            if self._move(staged_bytecode, target):
                bytecode_path = target
                base64_path = self.write_base64(target)

        if os.path.exists(staged_abi):
            target = self.mapper.build_path(file_path, ABI_SUFFIX)
            if self._move(staged_abi, target):
                abi_path = target

        if os.path.exists(staged_source):
            try:
                os.unlink(staged_source)
                self.logger.debug("Removed staged source %s", staged_source)
            except OSError as e:
                self.logger.warning("Failed to remove staged source %s: %s", staged_source, e)

        return Artifact(bytecode_path=bytecode_path, abi_path=abi_path, base64_path=base64_path)

    def write_base64(self, bytecode_path: str) -> str | None:
        """Write the base64 encoding of a bytecode file next to it."""
        target = replace_extension(bytecode_path, BASE64_SUFFIX)
        try:
            data = Path(bytecode_path).read_bytes()
            Path(target).write_text(base64.b64encode(data).decode("ascii"), encoding="ascii")
        except OSError as e:
            self.logger.warning("Failed to write base64 artifact for %s: %s", bytecode_path, e)
            return None
        return target

    def _move(self, source: str, target: str) -> bool:
        try:
            Path(target).parent.mkdir(parents=True, exist_ok=True)
            shutil.move(source, target)
        except OSError as e:
            self.logger.warning("Failed to promote %s to %s: %s", source, target, e)
            return False
        self.logger.debug("Promoted %s -> %s", source, target)
        return True
