"""
Service lookup for objects built outside the container.

Drivers, parsers and schedulers are constructed directly by the CLI and by
tests, sometimes before ``bootstrap()`` and sometimes without it. They find
shared services here: the registered implementation when there is one,
otherwise a local default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(interface: type[T], default_factory: Callable[[], T]) -> T:
    """Return the registered implementation of ``interface``, or ``default_factory()``."""
    from .container import get_container

    instance = get_container().try_resolve(interface)
    return default_factory() if instance is None else instance


class LazyService(Generic[T]):
    """
    Class attribute resolved on first access, once per instance.

    ``adapt`` receives the resolved service and the owning instance and
    returns what the instance actually uses, e.g. a logger named after the
    owner's class. Assigning the attribute replaces the service for that
    instance only, which is how tests inject mocks.
    """

    def __init__(
        self,
        interface: type[T],
        default_factory: Callable[[], T],
        adapt: Callable[[T, Any], T] | None = None,
    ) -> None:
        self.interface = interface
        self.default_factory = default_factory
        self.adapt = adapt
        self._attr = f"_service_{id(self)}"

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr = f"_{name}_service"

    def __get__(self, obj: Any, objtype: type | None = None) -> T:
        if obj is None:
            return self  # type: ignore[return-value]
        if self._attr not in obj.__dict__:
            service = resolve_or_default(self.interface, self.default_factory)
            if self.adapt is not None:
                service = self.adapt(service, obj)
            obj.__dict__[self._attr] = service
        return obj.__dict__[self._attr]

    def __set__(self, obj: Any, value: T) -> None:
        obj.__dict__[self._attr] = value
