"""
Base linter.

Runs an external lint tool over a document's unsaved text, fed on stdin,
and maps its report to editor diagnostics.
"""

from __future__ import annotations

import json
import os
import subprocess
import tempfile
from abc import abstractmethod
from typing import Any

from ...core.exceptions import LinterError
from ...core.interfaces.linter import ILinter
from ...core.models.diagnostic import EditorDiagnostic
from ...services.logging import component_logger

LINT_TIMEOUT = 30


class BaseLinter(ILinter):
    """
    Abstract base class for linters backed by a command line tool.

    Subclasses set ``linter_name`` (used for registration) and implement
    ``command`` and ``parse_output``.
    """

    linter_name: str = ""

    logger = component_logger()

    def __init__(self, root_path: str | None = None, rules: dict[str, Any] | None = None) -> None:
        self.root_path = root_path
        self.rules: dict[str, Any] = dict(rules or {})

    @property
    def name(self) -> str:
        return self.linter_name

    def set_ide_rules(self, rules: dict[str, Any] | None) -> None:
        self.rules = dict(rules or {})

    @abstractmethod
    def command(self, file_path: str, config_path: str | None) -> list[str]:
        """
        Build the command line.

        Args:
            file_path: Document path, for tools that report it back
            config_path: Generated rule file, or None when no editor rules are set
        """
        pass

    @abstractmethod
    def parse_output(self, output: str, file_path: str) -> list[EditorDiagnostic]:
        """Parse the tool's report."""
        pass

    def config_document(self) -> dict[str, Any]:
        """Rule file contents written when editor rules are set."""
        return {"rules": self.rules}

    def validate(self, file_path: str, text: str) -> list[EditorDiagnostic]:
        config_path = self._write_config() if self.rules else None
        try:
            cmd = self.command(file_path, config_path)
            self.logger.debug("Running linter: %s", " ".join(cmd))
            try:
                result = subprocess.run(
                    cmd,
                    input=text,
                    capture_output=True,
                    text=True,
                    cwd=self.root_path or os.path.dirname(file_path) or None,
                    timeout=LINT_TIMEOUT,
                )
            except (OSError, subprocess.TimeoutExpired) as e:
                raise LinterError(f"Failed to run {self.name}", linter=self.name, cause=e) from e
        finally:
            if config_path:
                os.unlink(config_path)

        if result.stderr:
            self.logger.debug("%s stderr: %s", self.name, result.stderr.strip())
        return self.parse_output(result.stdout, file_path)

    def _write_config(self) -> str:
        fd, path = tempfile.mkstemp(prefix=f"{self.name}-", suffix=".json")
        with os.fdopen(fd, "w") as f:
            json.dump(self.config_document(), f)
        return path
