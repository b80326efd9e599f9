"""
Logging backend for solcheck.

Every component logs through a child of the ``solcheck`` logger, named after
its class, so one validation pass reads like::

    2026-10-19 10:02:11 [WARNING] solcheck.ValidationScheduler: Linting failed: ... (uri='file:///p/A.sol')

stdout belongs to the editor transport, so console output goes to stderr.
The file log lives next to the installed toolchain under ``~/.solcheck``.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.di import LazyService
from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig

ROOT_LOGGER_NAME = "solcheck"
DEFAULT_LOG_FILE = Path.home() / ".solcheck" / "logs" / "server.log"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 2
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def render_context(context: dict[str, Any]) -> str:
    """Format context fields as `` (key=value, ...)``, sorted by key."""
    if not context:
        return ""
    fields = ", ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
    return f" ({fields})"


class SolcheckLogger(ILogger):
    """ILogger backed by a stdlib ``logging.Logger``."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @classmethod
    def configure(
        cls,
        level: str = "warning",
        console: bool = False,
        log_file: Path | None = DEFAULT_LOG_FILE,
    ) -> SolcheckLogger:
        """
        Set up the ``solcheck`` logger and return it.

        Handlers from an earlier call are replaced. A log file that cannot be
        opened is reported on stderr and left out.

        Args:
            level: Minimum level recorded
            console: Also write to stderr
            log_file: Rotating log file, or None for no file
        """
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(_LEVELS.get(level.lower(), logging.WARNING))
        logger.propagate = False
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        handlers: list[logging.Handler] = []
        if console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                handlers.append(
                    RotatingFileHandler(
                        log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
                    )
                )
            except OSError as e:
                sys.stderr.write(f"solcheck: cannot open log file {log_file}: {e}\n")

        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        if not handlers:
            logger.addHandler(logging.NullHandler())
        return cls(logger)

    @classmethod
    def from_config(cls, config: LoggingConfig) -> SolcheckLogger:
        """Configure from the ``[logging]`` settings section."""
        log_file = None
        if config.file:
            log_file = Path(config.file_path).expanduser() if config.file_path else DEFAULT_LOG_FILE
        return cls.configure(level=config.level, console=config.console, log_file=log_file)

    @property
    def name(self) -> str:
        return self._logger.name

    def log(self, level: str, message: str, *args: Any, exc_info: bool = False, **context: Any) -> None:
        suffix = render_context(context)
        if args:
            # the suffix is appended to a format string
            suffix = suffix.replace("%", "%%")
        self._logger.log(_LEVELS.get(level, logging.INFO), message + suffix, *args, exc_info=exc_info)

    def child(self, name: str) -> SolcheckLogger:
        return SolcheckLogger(self._logger.getChild(name))


class NullLogger(ILogger):
    """Logger that drops every record; used until ``bootstrap()`` registers one."""

    def log(self, level: str, message: str, *args: Any, **context: Any) -> None:
        pass

    def child(self, name: str) -> NullLogger:
        return self


def component_logger() -> LazyService:
    """
    Class attribute giving each instance a logger named after its class.

    Example:
        class StagingService:
            logger = component_logger()
    """
    return LazyService(ILogger, NullLogger, adapt=lambda logger, owner: logger.child(type(owner).__name__))
