"""
Core infrastructure for solcheck's dependency injection and plugin architecture.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Plugin registry with auto-discovery
- Application bootstrap for initialization
- Protocol definitions for all service interfaces
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve
from .exceptions import (
    ComponentInstallError,
    ComponentNotFoundError,
    ConfigFileError,
    ConfigValidationError,
    LinterError,
    PluginLoadError,
    PluginNotFoundError,
    SolcheckConfigError,
    SolcheckException,
    SolcheckPluginError,
    ToolchainError,
    ToolchainRunError,
)

__all__ = [
    "ComponentInstallError",
    "ComponentNotFoundError",
    "ConfigFileError",
    "ConfigValidationError",
    "LinterError",
    "PluginLoadError",
    "PluginNotFoundError",
    "ServiceContainer",
    "SolcheckConfigError",
    "SolcheckException",
    "SolcheckPluginError",
    "ToolchainError",
    "ToolchainRunError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
]
