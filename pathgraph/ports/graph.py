"""Graph ports - Abstractions for loading and writing graphs.

These protocols define the contracts between the engine and the
collaborators around it: loaders that supply node/edge records and
writers that persist result edges.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Protocol, Sequence, Union

if TYPE_CHECKING:
    from ..domain.models import Edge, GraphData, Node, NodeId


class GraphRepositoryPort(Protocol):
    """Port for loading graph data.

    Implementations:
    - adapters/graph/csv_repository.py (CSVGraphRepository)
    - adapters/graph/mixed_repository.py (MixedFileGraphRepository)

    The repository parses and validates its source completely before
    returning; the engine never receives partially parsed input.
    """

    def load(self) -> GraphData:
        """Load the node and edge records.

        Returns:
            GraphData with every node and edge of the source.
        """
        ...

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        """Get node details by id.

        Args:
            node_id: The node id to look up.

        Returns:
            The node, or None if not found.
        """
        ...

    def list_nodes(self) -> Sequence[Node]:
        """List all nodes of the graph."""
        ...


class EdgeWriterPort(Protocol):
    """Port for persisting edge lists.

    Implementation: adapters/graph/edge_writer.py (CSVEdgeWriter)

    Writing a list of edges and reading it back must reproduce the same
    (source, target, weight) triples.
    """

    def write_edges(self, edges: Iterable[Edge], path: Union[str, Path]) -> Path:
        """Write edges to ``path`` and return the path written."""
        ...

    def read_edges(self, path: Union[str, Path]) -> Sequence[Edge]:
        """Read edges previously written by write_edges."""
        ...

