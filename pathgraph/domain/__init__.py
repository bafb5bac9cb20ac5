"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DuplicateNodeError,
    GraphBuildError,
    GraphLoadError,
    GraphWriteError,
    InvalidPathError,
    InvalidWeightError,
    NegativeWeightRejectedError,
    NoRouteFoundError,
    PathGraphError,
    QueryCancelledError,
    UnknownNodeError,
    UnknownNodeReferenceError,
    UnknownSourceError,
    UnknownTargetError,
    UnsupportedAlgorithmError,
)
from .models import (
    Algorithm,
    Edge,
    GraphData,
    Node,
    NodeId,
    NoPathExists,
    PathQueryResult,
    PathResult,
    ShortestPathTree,
)

__all__ = [
    # Models
    "Algorithm",
    "Edge",
    "GraphData",
    "Node",
    "NodeId",
    "NoPathExists",
    "PathQueryResult",
    "PathResult",
    "ShortestPathTree",
    # Errors
    "PathGraphError",
    "GraphBuildError",
    "DuplicateNodeError",
    "UnknownNodeReferenceError",
    "NegativeWeightRejectedError",
    "InvalidWeightError",
    "UnknownNodeError",
    "UnknownSourceError",
    "UnknownTargetError",
    "InvalidPathError",
    "QueryCancelledError",
    "NoRouteFoundError",
    "GraphLoadError",
    "GraphWriteError",
    "UnsupportedAlgorithmError",
    "ConfigurationError",
]
