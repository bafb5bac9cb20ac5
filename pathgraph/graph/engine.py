"""Single-source shortest paths using Dijkstra's algorithm.

The engine is built once from validated node and edge records and is
read-only afterwards. Every query allocates its own distance table,
predecessor table and heap, so one engine can serve concurrent queries.
"""

from __future__ import annotations

import heapq
import logging
import math
import threading
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..domain.errors import (
    DuplicateNodeError,
    InvalidPathError,
    InvalidWeightError,
    NegativeWeightRejectedError,
    QueryCancelledError,
    UnknownNodeError,
    UnknownNodeReferenceError,
    UnknownSourceError,
    UnknownTargetError,
)
from ..domain.models import (
    Algorithm,
    Edge,
    Node,
    NodeId,
    NoPathExists,
    PathQueryResult,
    PathResult,
    ShortestPathTree,
)
from .adjacency import AdjacencyIndex, Neighbor

logger = logging.getLogger(__name__)

# dist, prev, weight of the relaxing edge, settle order
_RunState = Tuple[
    Dict[NodeId, float], Dict[NodeId, NodeId], Dict[NodeId, float], List[NodeId]
]


def _order_key(node_id: NodeId) -> Tuple[str, Any]:
    return (type(node_id).__name__, node_id)


class ShortestPathEngine:
    """Dijkstra shortest-path engine over an immutable adjacency index.

    Use :meth:`build` to construct an instance. Ties between nodes with
    the same tentative distance are broken by node id ordering, so results
    are reproducible from run to run.

    Complexity:
        build is O(V + E), a query is O(E log V) over the reached nodes.
    """

    algorithm = Algorithm.DIJKSTRA

    def __init__(
        self,
        nodes: Dict[NodeId, Node],
        index: AdjacencyIndex,
        directed: bool,
    ) -> None:
        self._nodes = nodes
        self._index = index
        self._directed = directed

        try:
            ordered = sorted(nodes, key=_order_key)
        except TypeError:
            ordered = list(nodes)
        self._rank: Dict[NodeId, int] = {node_id: i for i, node_id in enumerate(ordered)}

    @classmethod
    def build(
        cls,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        directed: bool = True,
    ) -> ShortestPathEngine:
        """Validate the records and build the adjacency index.

        Args:
            nodes: Node records; ids must be unique.
            edges: Edge records; endpoints must be known node ids.
            directed: If False, every edge is also inserted reversed.

        Raises:
            DuplicateNodeError: If a node id appears twice.
            UnknownNodeReferenceError: If an edge endpoint is not a node.
            NegativeWeightRejectedError: If an edge weight is below zero.
            InvalidWeightError: If an edge weight is NaN or infinite.
        """
        by_id: Dict[NodeId, Node] = {}
        for node in nodes:
            if node.id in by_id:
                raise DuplicateNodeError(
                    f"Duplicate node id: {node.id!r}",
                    node_id=node.id,
                )
            by_id[node.id] = node

        checked: List[Edge] = []
        for edge in edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in by_id:
                    raise UnknownNodeReferenceError(
                        f"Edge {edge.source!r} -> {edge.target!r} references "
                        f"unknown node {endpoint!r}",
                        node_id=endpoint,
                        edge=edge,
                    )
            weight = float(edge.weight)
            if math.isnan(weight):
                raise InvalidWeightError(
                    f"Edge {edge.source!r} -> {edge.target!r} has a NaN weight",
                    edge=edge,
                )
            if weight < 0:
                raise NegativeWeightRejectedError(
                    f"Edge {edge.source!r} -> {edge.target!r} has negative "
                    f"weight {weight}",
                    edge=edge,
                )
            if math.isinf(weight):
                raise InvalidWeightError(
                    f"Edge {edge.source!r} -> {edge.target!r} has an infinite weight",
                    edge=edge,
                )
            checked.append(Edge(edge.source, edge.target, weight))

        index = AdjacencyIndex(by_id, checked, directed=directed)
        logger.debug(
            "Engine built",
            extra={
                "nodes": len(by_id),
                "edges": len(checked),
                "directed": directed,
            },
        )
        return cls(by_id, index, directed)

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        """Number of directed entries in the adjacency index."""
        return self._index.edge_count

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def node(self, node_id: NodeId) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(f"Unknown node: {node_id!r}", node_id=node_id)

    def outgoing(self, node_id: NodeId) -> Tuple[Neighbor, ...]:
        """Outgoing (neighbor, weight) pairs of a node."""
        self.node(node_id)
        return self._index.outgoing(node_id)

    def shortest_path(
        self,
        source: NodeId,
        target: NodeId,
        cancel: Optional[threading.Event] = None,
    ) -> PathQueryResult:
        """Compute the shortest path from ``source`` to ``target``.

        The search stops as soon as the target is settled.

        Returns:
            PathResult with the node sequence and total distance, or
            NoPathExists if the target cannot be reached.

        Raises:
            UnknownSourceError: If source is not in the graph.
            UnknownTargetError: If target is not in the graph.
            QueryCancelledError: If ``cancel`` gets set during the search.
        """
        self._check_source(source)
        if target not in self._nodes:
            raise UnknownTargetError(f"Unknown target node: {target!r}", node_id=target)

        if source == target:
            return PathResult(source=source, target=target, path=(source,), distance=0.0)

        dist, prev, _, _ = self._run(source, target, cancel)
        if target not in dist:
            logger.debug(
                "No path",
                extra={"source": source, "target": target},
            )
            return NoPathExists(source=source, target=target)

        path = [target]
        current = target
        while current != source:
            if current not in prev:
                return NoPathExists(source=source, target=target)
            current = prev[current]
            path.append(current)
        path.reverse()

        return PathResult(
            source=source,
            target=target,
            path=tuple(path),
            distance=dist[target],
        )

    def shortest_path_tree(
        self,
        source: NodeId,
        cancel: Optional[threading.Event] = None,
    ) -> ShortestPathTree:
        """Compute shortest distances and predecessors to every reachable node.

        Raises:
            UnknownSourceError: If source is not in the graph.
            QueryCancelledError: If ``cancel`` gets set during the search.
        """
        self._check_source(source)
        dist, prev, via, settled = self._run(source, None, cancel)

        logger.debug(
            "Shortest-path tree computed",
            extra={"source": source, "reached": len(settled)},
        )
        return ShortestPathTree(
            source=source,
            distances=MappingProxyType({node: dist[node] for node in settled}),
            predecessors=MappingProxyType(
                {node: prev[node] for node in settled if node != source}
            ),
            weights=MappingProxyType(
                {node: via[node] for node in settled if node != source}
            ),
        )

    def path_distance(self, path: Sequence[NodeId]) -> float:
        """Total weight of a walk, using the lightest of any parallel edges.

        Raises:
            InvalidPathError: If the path is empty or two consecutive
                nodes are not joined by an edge.
        """
        if not path:
            raise InvalidPathError("Empty path", path=())

        for node_id in path:
            if node_id not in self._nodes:
                raise InvalidPathError(
                    f"Path contains unknown node {node_id!r}",
                    path=tuple(path),
                )

        total = 0.0
        for u, v in zip(path, path[1:]):
            weight = self._index.lightest_weight(u, v)
            if weight is None:
                raise InvalidPathError(
                    f"No edge from {u!r} to {v!r}",
                    path=tuple(path),
                )
            total += weight
        return total

    def _check_source(self, source: NodeId) -> None:
        if source not in self._nodes:
            raise UnknownSourceError(f"Unknown source node: {source!r}", node_id=source)

    def _run(
        self,
        source: NodeId,
        target: Optional[NodeId],
        cancel: Optional[threading.Event],
    ) -> _RunState:
        dist: Dict[NodeId, float] = {source: 0.0}
        prev: Dict[NodeId, NodeId] = {}
        via: Dict[NodeId, float] = {}
        settled: List[NodeId] = []

        rank = self._rank
        heap: List[Tuple[float, int, NodeId]] = [(0.0, rank[source], source)]

        while heap:
            if cancel is not None and cancel.is_set():
                raise QueryCancelledError(
                    f"Query from {source!r} cancelled",
                    source=source,
                )

            d_u, _, u = heapq.heappop(heap)

            # Skip stale entries
            if d_u != dist[u]:
                continue

            settled.append(u)
            if u == target:
                break

            for v, w in self._index.outgoing(u):
                alt = d_u + w
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = u
                    via[v] = w
                    heapq.heappush(heap, (alt, rank[v], v))

        return dist, prev, via, settled

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nodes={self.node_count}, "
            f"edges={self.edge_count}, directed={self._directed})"
        )
