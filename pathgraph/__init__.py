"""Top-level package for pathgraph.

pathgraph loads a weighted graph from delimited text and answers
single-source shortest-path queries with Dijkstra's algorithm: one
shortest path with its total distance, or the full shortest-path tree
from a source, ready to be rendered or written back to disk.
"""

from .domain.models import (
    Algorithm,
    Edge,
    GraphData,
    Node,
    NoPathExists,
    PathResult,
    ShortestPathTree,
)
from .graph import ShortestPathEngine, create_engine

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Edge",
    "GraphData",
    "Node",
    "NoPathExists",
    "PathResult",
    "ShortestPathTree",
    "ShortestPathEngine",
    "create_engine",
]
