"""Single-file graph repository adapter.

Reads a headerless delimited file that mixes two kinds of record,
told apart by their field count:

    1,Alpha          node record: id, name
    2,Beta
    1,2,4.5          edge record: source, target, weight

Records may come in any order. Blank lines are ignored; any other field
count is a GraphLoadError.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ...config import GraphConfig, get_config
from ...domain.errors import GraphLoadError
from ...domain.models import Edge, GraphData, Node, NodeId
from .records import parse_float, parse_node_id


@dataclass
class MixedFileGraphRepository:
    """Graph repository reading node and edge records from one file.

    This adapter implements GraphRepositoryPort.

    Attributes:
        config: Graph configuration (graph_file, delimiter, id type)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    _data: Optional[GraphData] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> GraphData:
        """Load node and edge records from the mixed file.

        Raises:
            GraphLoadError: If the file is missing or a record is malformed.
        """
        if self._data is not None:
            return self._data

        path = self.config.graph_path
        self._logger.debug("Loading graph", extra={"graph_path": str(path)})

        nodes: List[Node] = []
        edges: List[Edge] = []
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.reader(f, delimiter=self.config.delimiter)
                for fields in reader:
                    fields = [value.strip() for value in fields]
                    if not any(fields):
                        continue
                    if len(fields) == 2:
                        nodes.append(self._parse_node(fields, path, reader.line_num))
                    elif len(fields) == 3:
                        edges.append(self._parse_edge(fields, path, reader.line_num))
                    else:
                        raise GraphLoadError(
                            f"Expected 2 (node) or 3 (edge) fields, got {len(fields)}",
                            file_path=str(path),
                            line_number=reader.line_num,
                        )
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

        self._data = GraphData(nodes=tuple(nodes), edges=tuple(edges))
        self._logger.info(
            "Graph loaded",
            extra={"nodes": len(nodes), "edges": len(edges)},
        )
        return self._data

    def _parse_node(self, fields: List[str], path: Path, line_number: int) -> Node:
        node_id = parse_node_id(fields[0], self.config.id_type, path, line_number)
        return Node(id=node_id, name=fields[1] or None)

    def _parse_edge(self, fields: List[str], path: Path, line_number: int) -> Edge:
        return Edge(
            source=parse_node_id(fields[0], self.config.id_type, path, line_number),
            target=parse_node_id(fields[1], self.config.id_type, path, line_number),
            weight=parse_float(fields[2], "weight", path, line_number),
        )

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        for node in self.load().nodes:
            if node.id == node_id:
                return node
        return None

    def list_nodes(self) -> Sequence[Node]:
        return list(self.load().nodes)

    def clear_cache(self) -> None:
        """Clear cached graph data."""
        self._data = None
