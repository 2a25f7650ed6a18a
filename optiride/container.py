"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - for web server contexts
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(ComparisonService)

        # Testing
        container = Container.create_default()
        container.register(GeocoderPort, lambda: FakeGeocoder())
        service = container.resolve(ComparisonService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Re-registering a type drops any instance already built for it.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.geocoding import NominatimGeocoderAdapter
        from .adapters.rendering import FoliumMapRenderer
        from .domain.providers import select_providers
        from .ports.geocoding import GeocoderPort
        from .ports.rendering import MapRendererPort
        from .services import (
            ComparisonService,
            DeepLinkBuilder,
            FareEstimator,
            FareSchedule,
            LocationResolver,
        )

        config = config or get_config()
        container = cls(config=config)

        # Geocoding
        container.register(
            GeocoderPort,
            lambda: NominatimGeocoderAdapter(config.geocoding),
        )

        # Rendering
        container.register(MapRendererPort, lambda: FoliumMapRenderer())

        # Pipeline
        container.register(
            LocationResolver,
            lambda: LocationResolver(container.resolve(GeocoderPort)),
        )
        container.register(
            FareEstimator,
            lambda: FareEstimator(FareSchedule.from_config(config.pricing)),
        )
        container.register(DeepLinkBuilder, lambda: DeepLinkBuilder())

        # Main service
        def create_comparison_service() -> ComparisonService:
            return ComparisonService(
                resolver=container.resolve(LocationResolver),
                fare_estimator=container.resolve(FareEstimator),
                link_builder=container.resolve(DeepLinkBuilder),
                providers=select_providers(config.pricing.providers),
                currency=config.pricing.currency,
                resolve_concurrently=config.api.resolve_concurrently,
            )

        container.register(ComparisonService, create_comparison_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
