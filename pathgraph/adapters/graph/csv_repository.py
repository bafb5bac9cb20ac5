"""CSV Graph Repository adapter.

Loads a graph from two delimited tables, each starting with a header row:

- nodes: ``id`` plus optional ``name``, ``x``, ``y``; any other column is
  kept as an opaque string attribute. Without an ``id`` column the first
  column holds the id.
- edges: ``source``, ``target`` (else the first two columns) and the
  configured weight column(s). Several weight columns are summed into a
  composite weight.

Malformed input is reported as GraphLoadError before anything reaches
the engine.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ...config import GraphConfig, get_config
from ...domain.errors import GraphLoadError
from ...domain.models import Edge, GraphData, Node, NodeId
from .records import parse_float, parse_node_id, parse_optional_float

_NODE_COLUMNS = ("name", "x", "y")


@dataclass
class CSVGraphRepository:
    """Graph repository that loads from a nodes CSV and an edges CSV.

    This adapter implements GraphRepositoryPort.

    Attributes:
        config: Graph configuration (paths, delimiter, id type, weights)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _data: Optional[GraphData] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> GraphData:
        """Load node and edge records from the CSV files.

        Returns:
            GraphData with all nodes and edges.

        Raises:
            GraphLoadError: If a file is missing or malformed.
        """
        if self._data is not None:
            return self._data

        self._logger.debug(
            "Loading graph",
            extra={
                "nodes_path": str(self.config.nodes_path),
                "edges_path": str(self.config.edges_path),
            },
        )

        nodes = self._load_nodes(self.config.nodes_path)
        edges = self._load_edges(self.config.edges_path)
        self._data = GraphData(nodes=tuple(nodes), edges=tuple(edges))

        self._logger.info(
            "Graph loaded",
            extra={"nodes": len(nodes), "edges": len(edges)},
        )
        return self._data

    def _read_rows(
        self, path: Path
    ) -> Tuple[List[str], List[Tuple[int, Dict[str, Optional[str]]]]]:
        """Read a delimited table into (header, [(line_number, row), ...])."""
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f, delimiter=self.config.delimiter)
                header = [name.strip() for name in (reader.fieldnames or [])]
                if not header:
                    raise GraphLoadError("Missing header row", file_path=str(path))
                reader.fieldnames = header

                rows = []
                for row in reader:
                    if None in row:
                        raise GraphLoadError(
                            f"Row has more fields than the {len(header)}-column header",
                            file_path=str(path),
                            line_number=reader.line_num,
                        )
                    rows.append((reader.line_num, row))
        except OSError as e:
            raise GraphLoadError(
                "Failed to read graph file",
                cause=e,
                file_path=str(path),
            )
        except csv.Error as e:
            raise GraphLoadError(
                "Malformed delimited file",
                cause=e,
                file_path=str(path),
            )
        return header, rows

    def _load_nodes(self, path: Path) -> List[Node]:
        header, rows = self._read_rows(path)
        id_column = "id" if "id" in header else header[0]
        extra_columns = [
            name for name in header if name != id_column and name not in _NODE_COLUMNS
        ]

        nodes: List[Node] = []
        for line_number, row in rows:
            node_id = parse_node_id(
                row[id_column], self.config.id_type, path, line_number
            )
            name = (row.get("name") or "").strip() or None
            nodes.append(
                Node(
                    id=node_id,
                    name=name,
                    x=parse_optional_float(row.get("x"), "x", path, line_number),
                    y=parse_optional_float(row.get("y"), "y", path, line_number),
                    attributes={
                        column: (row[column] or "").strip() for column in extra_columns
                    },
                )
            )
        return nodes

    def _load_edges(self, path: Path) -> List[Edge]:
        header, rows = self._read_rows(path)
        if "source" in header and "target" in header:
            source_column, target_column = "source", "target"
        elif len(header) >= 2:
            source_column, target_column = header[0], header[1]
        else:
            raise GraphLoadError(
                "Edges table needs source and target columns",
                file_path=str(path),
            )

        weight_columns = list(self.config.weight_columns)
        missing = [name for name in weight_columns if name not in header]
        if missing:
            raise GraphLoadError(
                f"Edges table lacks weight column(s): {', '.join(missing)}",
                file_path=str(path),
            )

        edges: List[Edge] = []
        for line_number, row in rows:
            source = parse_node_id(
                row[source_column], self.config.id_type, path, line_number
            )
            target = parse_node_id(
                row[target_column], self.config.id_type, path, line_number
            )
            weight = sum(
                parse_float(row[column], column, path, line_number)
                for column in weight_columns
            )
            edges.append(Edge(source=source, target=target, weight=weight))
        return edges

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        """Get node details by id.

        Args:
            node_id: The node id to look up.

        Returns:
            The node, or None if not found.
        """
        for node in self.load().nodes:
            if node.id == node_id:
                return node
        return None

    def list_nodes(self) -> Sequence[Node]:
        """List all nodes.

        Returns:
            Sequence of all nodes in file order.
        """
        return list(self.load().nodes)

    def clear_cache(self) -> None:
        """Clear cached graph data."""
        self._data = None
        self._logger.debug("Graph cache cleared")
