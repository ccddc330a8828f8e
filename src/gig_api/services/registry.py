"""Service registry for dependency injection."""

from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar, cast

T = TypeVar("T")
ServiceFactory = Callable[[], T]


class ServiceRegistry:
    """Registry for all shared services with support for singletons and factories.

    Factories are called once, on first lookup, and the instance is reused
    afterwards. Registering a type again replaces the previous provider.
    """

    def __init__(self):
        """Initialize an empty service registry."""
        self._instances: dict[type, Any] = {}
        self._factories: dict[type, ServiceFactory[Any]] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register a singleton instance by its type.

        Args:
            service_type: The type of the service to register
            instance: The singleton instance to register
        """
        self._factories.pop(service_type, None)
        self._instances[service_type] = instance

    def register_factory(self, service_type: type[T], factory: ServiceFactory[T]) -> None:
        """Register a lazy factory by its type.

        Args:
            service_type: The type of the service to register
            factory: Function creating the service on first lookup
        """
        self._instances.pop(service_type, None)
        self._factories[service_type] = factory

    def is_registered(self, service_type: type) -> bool:
        """Whether a provider exists for ``service_type``."""
        return service_type in self._instances or service_type in self._factories

    def get(self, service_type: type[T]) -> T:
        """Get a service instance by type.

        Args:
            service_type: The type of the service to retrieve

        Returns:
            An instance of the requested service

        Raises:
            KeyError: If the requested service is not registered
        """
        if service_type in self._instances:
            return cast(T, self._instances[service_type])

        factory = self._factories.get(service_type)
        if factory is None:
            raise KeyError(f"Service {service_type.__name__} not registered")

        instance = factory()
        self._instances[service_type] = instance
        return cast(T, instance)

    def clear(self) -> None:
        """Drop every registration."""
        self._instances.clear()
        self._factories.clear()


@lru_cache
def get_service_registry() -> ServiceRegistry:
    """Get the singleton service registry instance.

    Returns:
        The global service registry instance
    """
    return ServiceRegistry()
