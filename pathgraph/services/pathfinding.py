"""Pathfinding service - Main orchestrator.

Wires a graph repository, the shortest-path engine and an edge writer
together. The service holds only the immutable engine; every query
result is returned to the caller, who owns it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..config import AppConfig, get_config
from ..domain.errors import ConfigurationError, NoRouteFoundError
from ..domain.models import (
    NodeId,
    NoPathExists,
    PathQueryResult,
    PathResult,
    ShortestPathTree,
)
from ..graph import ShortestPathEngine, create_engine
from ..ports.graph import EdgeWriterPort, GraphRepositoryPort


@dataclass
class PathfindingService:
    """Service answering path queries over a loaded graph.

    Attributes:
        graph_repository: Supplies node and edge records
        edge_writer: Persists tree edges (required by export_tree)
        config: Configuration (algorithm, directedness, output paths)
    """

    graph_repository: GraphRepositoryPort
    edge_writer: Optional[EdgeWriterPort] = None
    config: AppConfig = field(default_factory=get_config)

    _engine: Optional[ShortestPathEngine] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def engine(self) -> ShortestPathEngine:
        """Return the engine, building it from the repository on first use.

        Raises:
            GraphLoadError: If the repository cannot load the graph.
            GraphBuildError: If the records do not form a valid graph.
        """
        with self._lock:
            if self._engine is None:
                data = self.graph_repository.load()
                self._engine = create_engine(
                    self.config.engine.selected_algorithm,
                    data.nodes,
                    data.edges,
                    directed=self.config.graph.directed,
                )
                self._logger.info(
                    "Engine ready",
                    extra={
                        "algorithm": self.config.engine.algorithm,
                        "nodes": self._engine.node_count,
                        "edges": self._engine.edge_count,
                        "directed": self._engine.directed,
                    },
                )
            return self._engine

    def find_path_safe(self, source: NodeId, target: NodeId) -> PathQueryResult:
        """Find the shortest path, returning NoPathExists when unreachable."""
        return self.engine().shortest_path(source, target)

    def find_path(self, source: NodeId, target: NodeId) -> PathResult:
        """Find the shortest path between two nodes.

        Raises:
            UnknownSourceError: If source is not in the graph.
            UnknownTargetError: If target is not in the graph.
            NoRouteFoundError: If no path exists.
        """
        self._logger.debug(
            "Finding path",
            extra={"source": source, "target": target},
        )
        result = self.find_path_safe(source, target)

        if isinstance(result, NoPathExists):
            self._logger.warning(
                "No path found",
                extra={"source": source, "target": target},
            )
            raise NoRouteFoundError(
                f"No path from {source} to {target}",
                source=source,
                target=target,
            )

        self._logger.info(
            "Path found",
            extra={
                "source": source,
                "target": target,
                "stops": result.num_stops,
                "distance": result.distance,
            },
        )
        return result

    def build_tree(self, source: NodeId) -> ShortestPathTree:
        """Compute the shortest-path tree rooted at ``source``."""
        tree = self.engine().shortest_path_tree(source)
        self._logger.info(
            "Tree computed",
            extra={"source": source, "reached": len(tree)},
        )
        return tree

    def write_tree(
        self,
        tree: ShortestPathTree,
        path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Write the edges of an already computed tree.

        Args:
            tree: Tree to persist.
            path: Destination file; defaults to ``config.output.tree_path``.

        Returns:
            The path written.

        Raises:
            ConfigurationError: If no edge writer was provided.
        """
        if self.edge_writer is None:
            raise ConfigurationError(
                "Writing tree edges requires an edge writer",
                setting_name="edge_writer",
            )
        destination = Path(path) if path is not None else self.config.output.tree_path
        return self.edge_writer.write_edges(tree.edges(), destination)

    def export_tree(
        self,
        source: NodeId,
        path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Compute the tree from ``source`` and write its edges."""
        return self.write_tree(self.build_tree(source), path)

    def reset(self) -> None:
        """Drop the cached engine so the next query reloads the graph."""
        with self._lock:
            self._engine = None
