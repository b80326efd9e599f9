"""
Dependency injection container for solcheck.

Uses dependency-injector for DI with support for:
- Singleton lifetimes (instance or lazy factory)
- Factory registration
- Interface-based resolution
- A linter registry for the pluggable lint strategies
"""

from collections.abc import Callable
from typing import Any, Optional, TypeVar

from dependency_injector import providers

from .exceptions import PluginLoadError, PluginNotFoundError
from .interfaces.linter import ILinter

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for solcheck.

    Combines dependency-injector's DI capabilities with a plugin registry
    for linters.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        # Dynamic provider storage (interface -> provider)
        self._providers: dict[type, providers.Provider] = {}

        # Linter registry (configuration name -> class)
        self._linters: dict[str, Callable[..., ILinter]] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration (uses dependency-injector providers)
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    # -------------------------------------------------------------------------
    # Linter registry
    # -------------------------------------------------------------------------

    def register_linter(self, name: str, linter_class: Callable[..., ILinter]) -> None:
        """
        Register a linter strategy.

        Args:
            name: Name used by the ``linter`` setting (e.g., 'solhint')
            linter_class: Class implementing ILinter
        """
        self._linters[name] = linter_class

    def get_linter(self, name: str, root_path: str | None = None, **kwargs: Any) -> ILinter:
        """
        Create a linter instance by name.

        Args:
            name: Linter name
            root_path: Project root the linter runs in

        Raises:
            PluginNotFoundError: If no linter registered under ``name``
            PluginLoadError: If the linter class rejects its arguments
        """
        if name not in self._linters:
            raise PluginNotFoundError(f"No linter registered: {name}", plugin_name=name)
        try:
            return self._linters[name](root_path, **kwargs)
        except TypeError as e:
            raise PluginLoadError(
                f"Cannot create linter {name}",
                plugin_name=name,
                plugin_type="linter",
                cause=e,
            ) from e

    def list_linters(self) -> list[str]:
        """List registered linter names."""
        return list(self._linters.keys())


# -------------------------------------------------------------------------
# Module-level convenience functions
# -------------------------------------------------------------------------


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)
