"""Typed domain errors for pathgraph.

Construction errors are fatal to the engine being built: no partially
built engine is ever returned. Query errors leave the engine untouched
and reusable.

All errors inherit from PathGraphError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass
class PathGraphError(Exception):
    """Base error for the pathgraph domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GraphBuildError(PathGraphError):
    """The node/edge records cannot form a valid graph."""


@dataclass
class DuplicateNodeError(GraphBuildError):
    """The same node id was supplied more than once.

    Attributes:
        node_id: The repeated node id
    """

    node_id: Any = None


@dataclass
class UnknownNodeReferenceError(GraphBuildError):
    """An edge references a node id absent from the node set.

    Attributes:
        node_id: The id that could not be resolved
        edge: The offending edge
    """

    node_id: Any = None
    edge: Any = None


@dataclass
class NegativeWeightRejectedError(GraphBuildError):
    """An edge carries a negative weight.

    Attributes:
        edge: The offending edge
    """

    edge: Any = None


@dataclass
class InvalidWeightError(GraphBuildError):
    """An edge weight is NaN or infinite.

    Attributes:
        edge: The offending edge
    """

    edge: Any = None


@dataclass
class UnknownNodeError(PathGraphError):
    """A query referenced a node id that is not in the graph.

    Attributes:
        node_id: The id that was not found
    """

    node_id: Any = None


@dataclass
class UnknownSourceError(UnknownNodeError):
    """The query source is not in the graph."""


@dataclass
class UnknownTargetError(UnknownNodeError):
    """The query target is not in the graph."""


@dataclass
class InvalidPathError(PathGraphError):
    """A node sequence is not a walk through the graph.

    Attributes:
        path: The rejected node sequence
    """

    path: Tuple[Any, ...] = ()


@dataclass
class QueryCancelledError(PathGraphError):
    """A query was stopped through its cancellation signal.

    Attributes:
        source: Source node of the cancelled query
    """

    source: Any = None


@dataclass
class NoRouteFoundError(PathGraphError):
    """No path exists between the requested nodes.

    Raised by the service layer for callers that prefer an exception
    over the NoPathExists result value.

    Attributes:
        source: Source node id
        target: Target node id
    """

    source: Any = None
    target: Any = None


@dataclass
class GraphLoadError(PathGraphError):
    """Graph file missing, unreadable, or malformed.

    Attributes:
        file_path: Path to the graph data file if relevant
        line_number: 1-based line of the malformed record, if known
    """

    file_path: Optional[str] = None
    line_number: Optional[int] = None


@dataclass
class GraphWriteError(PathGraphError):
    """Result edges could not be written.

    Attributes:
        file_path: Destination that failed
    """

    file_path: Optional[str] = None


@dataclass
class UnsupportedAlgorithmError(PathGraphError):
    """The requested shortest-path algorithm is not implemented.

    Attributes:
        algorithm: The name that was requested
    """

    algorithm: str = ""


@dataclass
class ConfigurationError(PathGraphError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
