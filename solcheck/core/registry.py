"""
Linter discovery.

Built-in linters are the concrete ``ILinter`` classes defined in the modules
of ``solcheck.plugins.linters``. Other packages add theirs through the
``solcheck.linters`` entry-point group::

    [project.entry-points."solcheck.linters"]
    slither = "my_package.linter:SlitherLinter"

Each class is registered under its ``linter_name``, the value users put in
``validation.linter``.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from importlib.metadata import entry_points

from .container import ServiceContainer, get_container
from .di import resolve_or_default
from .interfaces.linter import ILinter
from .interfaces.logger import ILogger

BUILTIN_LINTERS = "solcheck.plugins.linters"
LINTER_ENTRY_POINTS = "solcheck.linters"


def _logger() -> ILogger:
    from ..services.logging import NullLogger

    return resolve_or_default(ILogger, NullLogger).child("registry")  # type: ignore[type-abstract]


def linter_name(cls: object) -> str | None:
    """Registry name of a concrete linter class, or None if ``cls`` is not one."""
    if not inspect.isclass(cls) or not issubclass(cls, ILinter) or inspect.isabstract(cls):
        return None
    return getattr(cls, "linter_name", None) or None


def discover_linters(container: ServiceContainer | None = None) -> list[str]:
    """
    Register every built-in and entry-point linter.

    A later registration under the same name replaces the earlier one, so an
    installed package can override a built-in linter.

    Returns:
        Names registered by this call, in discovery order
    """
    container = container or get_container()
    registered = []
    for cls in [*_builtin_linter_classes(), *_entry_point_linter_classes()]:
        name = linter_name(cls)
        if name is None:
            _logger().debug("Ignoring %r: not a named concrete linter", cls)
            continue
        container.register_linter(name, cls)
        registered.append(name)
    return registered


def _builtin_linter_classes() -> list[type]:
    package = importlib.import_module(BUILTIN_LINTERS)
    classes: list[type] = []
    for module_info in pkgutil.iter_modules(package.__path__):
        if module_info.name.startswith("_") or module_info.name == "base":
            continue
        module = importlib.import_module(f"{BUILTIN_LINTERS}.{module_info.name}")
        classes.extend(
            cls
            for _name, cls in inspect.getmembers(module, inspect.isclass)
            if cls.__module__ == module.__name__
        )
    return classes


def _entry_point_linter_classes() -> list[type]:
    classes = []
    for entry_point in entry_points(group=LINTER_ENTRY_POINTS):
        try:
            classes.append(entry_point.load())
        except Exception as e:
            _logger().warning("Cannot load linter %s: %s", entry_point.name, e, entry_point=entry_point.value)
    return classes
