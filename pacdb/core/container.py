"""
Service container for pacdb.

Holds one dependency-injector provider per interface type. Everything
registered here lives for the rest of the process: an existing object is
wrapped in ``providers.Object`` and a factory in ``providers.Singleton``,
which calls it on first resolve and keeps the result.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Process-wide mapping from interface type to provider.

    ``bootstrap()`` registers ILogger here; the database engine looks it
    up through ``get_logger()``.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared container and everything registered in it."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Bind ``interface`` to a single shared instance.

        Args:
            interface: Type used as the lookup key
            implementation: Instance to hand out as is
            factory: Called once, on the first resolve, to build the instance

        Raises:
            ValueError: If neither implementation nor factory is given
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers

    def resolve(self, interface: type[T]) -> T:
        """
        Return the instance bound to ``interface``.

        Raises:
            KeyError: If nothing is registered for it
        """
        if not self.is_registered(interface):
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        if not self.is_registered(interface):
            return None
        return self._providers[interface]()


def get_container() -> ServiceContainer:
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Shortcut for ``get_container().resolve(interface)``."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Shortcut for ``get_container().try_resolve(interface)``."""
    return get_container().try_resolve(interface)
