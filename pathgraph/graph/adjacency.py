"""Adjacency index used by the shortest-path engine.

The index is a multi-map: parallel edges between the same ordered pair
are kept as separate entries, in the order they were supplied.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..domain.models import Edge, NodeId

Neighbor = Tuple[NodeId, float]


class AdjacencyIndex(Mapping[NodeId, Tuple[Neighbor, ...]]):
    """Immutable mapping of node id -> outgoing (neighbor, weight) pairs.

    Every node passed at construction gets an entry, even when it has no
    outgoing edge. Edge endpoints are assumed to be validated already.
    """

    __slots__ = ("_outgoing", "_edge_count")

    def __init__(
        self,
        node_ids: Iterable[NodeId],
        edges: Iterable[Edge],
        directed: bool = True,
    ) -> None:
        outgoing: Dict[NodeId, List[Neighbor]] = {node_id: [] for node_id in node_ids}
        count = 0
        for edge in edges:
            outgoing[edge.source].append((edge.target, edge.weight))
            count += 1
            if not directed:
                mirrored = edge.reversed()
                outgoing[mirrored.source].append((mirrored.target, mirrored.weight))
                count += 1

        self._outgoing: Dict[NodeId, Tuple[Neighbor, ...]] = {
            node_id: tuple(neighbors) for node_id, neighbors in outgoing.items()
        }
        self._edge_count = count

    def __getitem__(self, node_id: NodeId) -> Tuple[Neighbor, ...]:
        return self._outgoing[node_id]

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._outgoing)

    def __len__(self) -> int:
        return len(self._outgoing)

    @property
    def edge_count(self) -> int:
        """Number of directed entries in the index."""
        return self._edge_count

    def outgoing(self, node_id: NodeId) -> Tuple[Neighbor, ...]:
        return self._outgoing.get(node_id, ())

    def lightest_weight(self, source: NodeId, target: NodeId) -> Optional[float]:
        """Return the smallest weight among the edges source -> target."""
        weights = [w for v, w in self._outgoing.get(source, ()) if v == target]
        return min(weights) if weights else None
