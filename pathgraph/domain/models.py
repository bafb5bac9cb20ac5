"""Immutable domain models for pathgraph.

All models are frozen dataclasses with slots. They describe the records
loaders hand to the engine and the results the engine hands back; none of
them carries behaviour that depends on the engine itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Iterator, Mapping, Optional, Tuple, Union

from .errors import UnsupportedAlgorithmError

NodeId = Hashable


class Algorithm(Enum):
    """Shortest-path strategies that are actually implemented.

    Only members of this enum can be selected; names of algorithms that
    were never built are rejected by parse().
    """

    DIJKSTRA = "dijkstra"

    @classmethod
    def parse(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        """Resolve a case-insensitive algorithm name.

        Raises:
            UnsupportedAlgorithmError: If the name is not implemented.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        supported = ", ".join(member.value for member in cls)
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm {name!r} (supported: {supported})",
            algorithm=str(name),
        )


@dataclass(frozen=True, slots=True)
class Node:
    """A graph vertex with optional display payload.

    Attributes:
        id: Unique node identifier
        name: Optional human-readable name
        x: Optional horizontal coordinate
        y: Optional vertical coordinate
        attributes: Any further columns, kept as opaque strings
    """

    id: NodeId
    name: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)

    @property
    def label(self) -> str:
        """Return the display label of the node."""
        return self.name if self.name else str(self.id)


@dataclass(frozen=True, slots=True)
class Edge:
    """A weighted edge from ``source`` to ``target``."""

    source: NodeId
    target: NodeId
    weight: float

    def reversed(self) -> Edge:
        """Return the same edge in the opposite direction."""
        return Edge(source=self.target, target=self.source, weight=self.weight)

    def as_tuple(self) -> Tuple[NodeId, NodeId, float]:
        return (self.source, self.target, self.weight)


@dataclass(frozen=True, slots=True)
class GraphData:
    """Validated node and edge records produced by a loader."""

    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


@dataclass(frozen=True, slots=True)
class PathResult:
    """A shortest path between two nodes.

    Attributes:
        source: Node the path starts at
        target: Node the path ends at
        path: Ordered node ids from source to target (inclusive)
        distance: Total weight of the path
    """

    source: NodeId
    target: NodeId
    path: Tuple[NodeId, ...]
    distance: float

    @property
    def found(self) -> bool:
        return True

    @property
    def num_stops(self) -> int:
        """Return the number of nodes on the path."""
        return len(self.path)

    def edges(self) -> Iterator[Tuple[NodeId, NodeId]]:
        """Yield the consecutive (u, v) pairs along the path."""
        return zip(self.path, self.path[1:])


@dataclass(frozen=True, slots=True)
class NoPathExists:
    """Negative query result: ``target`` is unreachable from ``source``.

    This is a normal outcome, not an error. Instances are falsy so that
    ``if result:`` distinguishes them from a PathResult.
    """

    source: NodeId
    target: NodeId

    @property
    def found(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False


PathQueryResult = Union[PathResult, NoPathExists]


@dataclass(frozen=True, slots=True)
class ShortestPathTree:
    """All shortest paths from one source.

    Only reached nodes appear in the tables; the source is present in
    ``distances`` (at 0) but never in ``predecessors``. Tables are ordered
    by the moment each node was settled, i.e. by increasing distance.
    The engine hands the tables out as read-only mappings.

    Attributes:
        source: Root of the tree
        distances: Node id -> shortest distance from the source
        predecessors: Node id -> previous node on its shortest path
        weights: Node id -> weight of the edge from its predecessor
    """

    source: NodeId
    distances: Mapping[NodeId, float] = field(hash=False)
    predecessors: Mapping[NodeId, NodeId] = field(hash=False)
    weights: Mapping[NodeId, float] = field(hash=False)

    def reaches(self, node: NodeId) -> bool:
        return node in self.distances

    def distance_to(self, node: NodeId) -> Optional[float]:
        """Return the distance to ``node``, or None if it was not reached."""
        return self.distances.get(node)

    def path_to(self, node: NodeId) -> PathQueryResult:
        """Walk predecessors back from ``node`` to the source."""
        if node not in self.distances:
            return NoPathExists(source=self.source, target=node)

        path = [node]
        current = node
        while current != self.source:
            current = self.predecessors[current]
            path.append(current)
        path.reverse()
        return PathResult(
            source=self.source,
            target=node,
            path=tuple(path),
            distance=self.distances[node],
        )

    def edges(self) -> Tuple[Edge, ...]:
        """Return the predecessor edges of the tree in settle order."""
        return tuple(
            Edge(source=prev, target=node, weight=self.weights[node])
            for node, prev in self.predecessors.items()
        )

    def __len__(self) -> int:
        return len(self.distances)

