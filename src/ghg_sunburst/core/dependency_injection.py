"""
Service registry for the CLI commands.

Commands resolve the hierarchy loader, the chart service and both painters
here, so tests can swap one by registering a different factory.
"""

import logging
from typing import Any, Callable, Dict, NamedTuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

class _Registration(NamedTuple):
    factory: Callable[[], Any]
    shared: bool

class DIContainer:
    """Maps a service class to the factory that builds it."""

    def __init__(self):
        self._registrations: Dict[Type, _Registration] = {}
        self._instances: Dict[Type, Any] = {}

    def register_singleton(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """One instance per container, built on first use."""
        self._register(interface, _Registration(factory, shared=True))

    def register_transient(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """A fresh instance on every lookup. Chart passes must not share state."""
        self._register(interface, _Registration(factory, shared=False))

    def _register(self, interface: Type, registration: _Registration) -> None:
        self._instances.pop(interface, None)
        self._registrations[interface] = registration

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    def get(self, interface: Type[T]) -> T:
        registration = self._registrations.get(interface)
        if registration is None:
            raise ValueError(f"Service {interface.__name__} not registered")

        if not registration.shared:
            return registration.factory()

        if interface not in self._instances:
            self._instances[interface] = registration.factory()
            logger.debug("Created %s", interface.__name__)
        return self._instances[interface]

_container = DIContainer()

def get_container() -> DIContainer:
    return _container

def setup_container() -> DIContainer:
    """Registers the loader, the chart service and the SVG and matplotlib painters."""
    from ghg_sunburst.core.application.chart_service import ChartService
    from ghg_sunburst.core.application.hierarchy_service import HierarchyService
    from ghg_sunburst.render.matplotlib_renderer import ChartRenderingService
    from ghg_sunburst.render.svg_renderer import SvgRenderingService

    container = get_container()
    container.register_singleton(HierarchyService, HierarchyService)
    container.register_transient(ChartService, ChartService)
    container.register_singleton(SvgRenderingService, SvgRenderingService)
    container.register_singleton(ChartRenderingService, ChartRenderingService)
    return container
