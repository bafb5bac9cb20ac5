"""CSV edge writer adapter.

Persists edge lists (typically the edges of a shortest-path tree) as
``source,target,weight`` rows, optionally under a header row, in the same
delimited format the loaders read. Weights are written with ``repr`` so
that reading the file back reproduces the exact float values.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ...config import GraphConfig, OutputConfig, get_config
from ...domain.errors import GraphLoadError, GraphWriteError
from ...domain.models import Edge
from .records import parse_float, parse_node_id

EDGE_HEADER = ("source", "target", "weight")


@dataclass
class CSVEdgeWriter:
    """Edge list writer/reader implementing EdgeWriterPort.

    Attributes:
        graph_config: Delimiter and id type shared with the loaders
        output_config: Header policy for written files
    """

    graph_config: GraphConfig = field(default_factory=lambda: get_config().graph)
    output_config: OutputConfig = field(default_factory=lambda: get_config().output)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def write_edges(self, edges: Iterable[Edge], path: Union[str, Path]) -> Path:
        """Write edges to a delimited file.

        Args:
            edges: Edges to write, in output order.
            path: Destination file; parent directories are created.

        Returns:
            The path that was written.

        Raises:
            GraphWriteError: If the file cannot be written.
        """
        path = Path(path)
        count = 0
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f, delimiter=self.graph_config.delimiter)
                if self.output_config.write_header:
                    writer.writerow(EDGE_HEADER)
                for edge in edges:
                    writer.writerow([edge.source, edge.target, repr(float(edge.weight))])
                    count += 1
        except OSError as e:
            raise GraphWriteError(
                "Failed to write edge file",
                cause=e,
                file_path=str(path),
            )

        self._logger.info(
            "Edges written",
            extra={"path": str(path), "edges": count},
        )
        return path

    def read_edges(self, path: Union[str, Path]) -> Sequence[Edge]:
        """Read an edge file written by write_edges.

        A leading ``source,target,weight`` header row is skipped when
        present.

        Raises:
            GraphLoadError: If the file is missing or a row is malformed.
        """
        path = Path(path)
        edges: List[Edge] = []
        id_type = self.graph_config.id_type
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.reader(f, delimiter=self.graph_config.delimiter)
                for fields in reader:
                    fields = [value.strip() for value in fields]
                    if not any(fields):
                        continue
                    if reader.line_num == 1 and tuple(fields) == EDGE_HEADER:
                        continue
                    if len(fields) != 3:
                        raise GraphLoadError(
                            f"Expected 3 fields, got {len(fields)}",
                            file_path=str(path),
                            line_number=reader.line_num,
                        )
                    edges.append(
                        Edge(
                            source=parse_node_id(fields[0], id_type, path, reader.line_num),
                            target=parse_node_id(fields[1], id_type, path, reader.line_num),
                            weight=parse_float(fields[2], "weight", path, reader.line_num),
                        )
                    )
        except OSError as e:
            raise GraphLoadError(
                "Failed to read edge file",
                cause=e,
                file_path=str(path),
            )
        except csv.Error as e:
            raise GraphLoadError(
                "Malformed delimited file",
                cause=e,
                file_path=str(path),
            )
        return edges
