"""
Process-wide service setup.

CLI commands call ``bootstrap()`` with the settings they loaded, before
building drivers and schedulers; tests call ``reset()`` between cases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter
from .registry import discover_linters

if TYPE_CHECKING:
    from .settings import SolcheckSettings

_initialized = False


def bootstrap(settings: SolcheckSettings | None = None) -> ServiceContainer:
    """
    Register the console presenter, the logger and every discoverable linter.

    Args:
        settings: Loaded settings; read from the working directory when omitted

    Returns:
        The global container. Calls after the first return it unchanged.
    """
    global _initialized

    container = get_container()
    if _initialized:
        return container

    from ..presenters.console import ConsolePresenter
    from ..services.logging import SolcheckLogger

    if settings is None:
        from .settings import load_settings

        settings = load_settings()
    logging_config = settings.logging

    container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]
    container.register_singleton(
        ILogger,  # type: ignore[type-abstract]
        factory=lambda: SolcheckLogger.from_config(logging_config),
    )
    discover_linters(container)

    _initialized = True
    return container


def reset() -> None:
    """Forget every registration and allow ``bootstrap()`` to run again."""
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    return _initialized
