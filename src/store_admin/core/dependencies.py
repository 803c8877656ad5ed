from typing import TypeVar, Type, Dict, Any, Callable

from flask import current_app

T = TypeVar('T')

EXTENSION_KEY = "store_admin.container"


class DependencyContainer:
    """Simple dependency injection container, one per Flask app"""

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}

    def register_factory(self, service_class: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory; the first instance it builds is cached"""
        key = self._get_service_key(service_class)
        self._factories[key] = factory

    def get(self, service_class: Type[T]) -> T:
        """Get service instance"""
        key = self._get_service_key(service_class)

        if key in self._services:
            return self._services[key]

        if key in self._factories:
            instance = self._factories[key]()
            self._services[key] = instance
            return instance

        raise ValueError(f"Service {service_class.__name__} not registered")

    def _get_service_key(self, service_class: Type[T]) -> str:
        """Get unique key for service class"""
        return f"{service_class.__module__}.{service_class.__qualname__}"


def get_container() -> DependencyContainer:
    """Container of the Flask app handling the current request"""
    return current_app.extensions[EXTENSION_KEY]


def get_service(service_class: Type[T]) -> T:
    return get_container().get(service_class)
