"""Wiring of repositories, writers and the pathfinding service.

A small explicit registry: every binding is a zero-argument factory keyed
by the port type it satisfies. The command line builds one container per
invocation; tests swap factories to inject fakes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Registry of factories keyed by port type.

    Example:
        service = Container.create_default().resolve(PathfindingService)

    Attributes:
        config: Configuration shared by every registered factory
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
        """Bind ``factory`` to ``port_type``, replacing any earlier binding.

        Singleton bindings build their instance on first resolve and reuse
        it; other bindings call the factory every time.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Return the instance bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the type.
        """
        with self._lock:
            factory = self._factories.get(port_type)
            if factory is None:
                raise KeyError(f"No binding for {port_type!r}")
            if port_type not in self._singleton_types:
                return factory()
            instance = self._singletons.get(port_type)
            if instance is None:
                instance = self._singletons[port_type] = factory()
            return instance

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_all(self) -> None:
        """Drop every binding and cached instance."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default bindings.

        The graph repository is chosen by ``config.graph.source``:
        ``csv`` reads the nodes/edges tables, ``mixed`` reads the single
        mixed-record file.

        Raises:
            ConfigurationError: If the graph source is not recognised.
        """
        from .adapters.graph import (
            CSVEdgeWriter,
            CSVGraphRepository,
            MixedFileGraphRepository,
        )
        from .ports.graph import EdgeWriterPort, GraphRepositoryPort
        from .services import PathfindingService

        config = config or get_config()
        container = cls(config=config)

        # Graph source based on config
        source = config.graph.source
        if source == "csv":
            container.register(
                GraphRepositoryPort,
                lambda: CSVGraphRepository(config.graph),
            )
        elif source == "mixed":
            container.register(
                GraphRepositoryPort,
                lambda: MixedFileGraphRepository(config.graph),
            )
        else:
            raise ConfigurationError(
                f"Unknown graph source: {source!r}",
                setting_name="graph.source",
                expected_type="'csv' or 'mixed'",
            )

        container.register(
            EdgeWriterPort,
            lambda: CSVEdgeWriter(config.graph, config.output),
        )

        def create_pathfinding_service() -> PathfindingService:
            return PathfindingService(
                graph_repository=container.resolve(GraphRepositoryPort),
                edge_writer=container.resolve(EdgeWriterPort),
                config=config,
            )

        container.register(PathfindingService, create_pathfinding_service)

        return container


_shared: Optional[Container] = None
_shared_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it from get_config() once."""
    global _shared
    with _shared_lock:
        if _shared is None:
            _shared = Container.create_default()
        return _shared


def reset_container() -> None:
    """Forget the process-wide container; the next get_container() rebuilds it."""
    global _shared
    with _shared_lock:
        if _shared is not None:
            _shared.clear_all()
        _shared = None
