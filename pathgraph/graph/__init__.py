"""Shortest-path engine and its strategy registry.

Only algorithms that are implemented appear in ``SOLVERS``; selecting
anything else fails through ``Algorithm.parse``.
"""

from __future__ import annotations

from typing import Dict, Iterable, Type, Union

from ..domain.models import Algorithm, Edge, Node
from .adjacency import AdjacencyIndex
from .engine import ShortestPathEngine

SOLVERS: Dict[Algorithm, Type[ShortestPathEngine]] = {
    Algorithm.DIJKSTRA: ShortestPathEngine,
}


def create_engine(
    algorithm: Union[str, Algorithm],
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    directed: bool = True,
) -> ShortestPathEngine:
    """Build an engine for the named algorithm.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not implemented.
    """
    solver_cls = SOLVERS[Algorithm.parse(algorithm)]
    return solver_cls.build(nodes, edges, directed=directed)


__all__ = ["AdjacencyIndex", "ShortestPathEngine", "SOLVERS", "create_engine"]
