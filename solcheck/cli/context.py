"""
Click context extension for solcheck CLI.

Provides SolcheckContext dataclass that holds solcheck-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import ConfigFileError
from ..core.settings import SolcheckSettings, load_settings


@dataclass
class SolcheckContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        settings: Settings resolved from config files and environment
    """

    cwd: Path
    settings: SolcheckSettings

    @classmethod
    def create(cls, cwd: Path | None = None) -> SolcheckContext:
        """Create a SolcheckContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())

        Raises:
            ConfigFileError: If the config file exists but cannot be read
        """
        if cwd is None:
            cwd = Path.cwd()
        settings = load_settings(start_dir=str(cwd))
        if settings._config_error:
            raise ConfigFileError(settings._config_error, file_path=settings._config_file)
        return cls(cwd=cwd, settings=settings)

