"""
Custom exception hierarchy for solcheck.

Provides a structured exception hierarchy so infrastructure failures are
raised as typed exceptions and handled at a known boundary, while problems
the toolchain itself reports travel as diagnostics.
"""

from __future__ import annotations


class SolcheckException(Exception):
    """
    Base exception for all solcheck errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, URLs, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class SolcheckConfigError(SolcheckException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(SolcheckConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, file not found, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(SolcheckConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers catching ValueError keep working.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Toolchain Errors
# =============================================================================


class ToolchainError(SolcheckException):
    """Base class for toolchain component errors."""

    pass


class ComponentNotFoundError(ToolchainError):
    """
    A component binary is not installed.

    Raised when a component is invoked before ``ensure_installed``.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        component: str | None = None,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class ComponentInstallError(ToolchainError):
    """
    Downloading or unpacking a component failed.

    Also raised when no version of a component can be resolved.
    """

    def __init__(
        self,
        message: str,
        *,
        component: str | None = None,
        url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        if url:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class ToolchainRunError(ToolchainError):
    """
    A component exited with a non-zero status.

    The captured output stays attached so callers can still parse it.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        command: str | None = None,
        output: str = "",
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, cause=cause)
        self.returncode = exit_code
        self.output = output


# =============================================================================
# Plugin Errors
# =============================================================================


class SolcheckPluginError(SolcheckException):
    """Base class for plugin-related errors."""

    pass


class PluginLoadError(SolcheckPluginError):
    """
    Error loading or instantiating a plugin.

    Raised when a plugin module cannot be imported or
    a plugin class cannot be instantiated.
    """

    def __init__(
        self,
        message: str,
        *,
        plugin_name: str | None = None,
        plugin_type: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if plugin_name:
            ctx["plugin_name"] = plugin_name
        if plugin_type:
            ctx["plugin_type"] = plugin_type
        super().__init__(message, context=ctx, cause=cause)


class PluginNotFoundError(SolcheckPluginError):
    """
    Requested plugin not found.

    Raised when a linter identified by name is not registered.
    """

    def __init__(
        self,
        message: str,
        *,
        plugin_name: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if plugin_name:
            ctx["plugin_name"] = plugin_name
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Linter Errors
# =============================================================================


class LinterError(SolcheckException):
    """
    A linter could not be run or its report could not be read.

    Linting is best-effort, so the scheduler logs these and still
    publishes compiler diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        linter: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if linter:
            ctx["linter"] = linter
        super().__init__(message, context=ctx, cause=cause)
