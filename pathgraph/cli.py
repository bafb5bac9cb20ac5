"""Command-line entry point.

Examples:
    python -m pathgraph path A D --nodes nodes.csv --edges edges.csv
    python -m pathgraph tree 1 --graph graph.txt --int-ids --undirected
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import ConfigurationError, PathGraphError, UnknownNodeError
from .domain.models import Algorithm, NodeId
from .monitoring import configure_logging
from .services import PathfindingService

CLI_LOG_LEVEL = "WARNING"

SettingsT = TypeVar("SettingsT", bound=BaseModel)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    source = common.add_mutually_exclusive_group()
    source.add_argument("--nodes", help="Nodes CSV (header row, id first).")
    source.add_argument(
        "--graph",
        help="Single headerless file mixing 'id,name' and 'u,v,weight' records.",
    )
    common.add_argument("--edges", help="Edges CSV (header row).")
    common.add_argument(
        "--undirected",
        action="store_true",
        help="Insert every edge in both directions.",
    )
    common.add_argument(
        "--algorithm",
        choices=[member.value for member in Algorithm],
        help="Shortest-path algorithm.",
    )
    common.add_argument(
        "--int-ids",
        action="store_true",
        help="Parse node ids as integers.",
    )
    common.add_argument(
        "--weight-column",
        action="append",
        dest="weight_columns",
        help="Edge column summed into the weight (repeatable).",
    )
    common.add_argument("--delimiter", help="Field delimiter.")
    common.add_argument("--log-level", help="Logging level, e.g. DEBUG.")

    parser = argparse.ArgumentParser(
        prog="pathgraph",
        description="Shortest paths and shortest-path trees over a weighted graph.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    path_cmd = commands.add_parser(
        "path", parents=[common], help="Shortest path between two nodes."
    )
    path_cmd.add_argument("source")
    path_cmd.add_argument("target")

    tree_cmd = commands.add_parser(
        "tree", parents=[common], help="Shortest-path tree from one node."
    )
    tree_cmd.add_argument("source")
    tree_cmd.add_argument("--output", help="File the tree edges are written to.")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: Optional[AppConfig] = None) -> AppConfig:
    """Overlay command-line options on the environment configuration."""
    base = base or get_config()

    graph_update: Dict[str, Any] = {}
    if args.graph:
        graph_update["source"] = "mixed"
        graph_update["graph_file"] = str(Path(args.graph).resolve())
    if args.nodes:
        graph_update["source"] = "csv"
        graph_update["nodes_file"] = str(Path(args.nodes).resolve())
    if args.edges:
        graph_update["edges_file"] = str(Path(args.edges).resolve())
    if args.undirected:
        graph_update["directed"] = False
    if args.int_ids:
        graph_update["id_type"] = "int"
    if args.weight_columns:
        graph_update["weight_columns"] = list(args.weight_columns)
    if args.delimiter:
        graph_update["delimiter"] = args.delimiter

    engine_update: Dict[str, Any] = {}
    if args.algorithm:
        engine_update["algorithm"] = args.algorithm

    observability_update: Dict[str, Any] = {}
    if args.log_level:
        observability_update["level"] = args.log_level
    elif "level" not in base.observability.model_fields_set:
        # stderr carries only warnings and errors unless a level was requested
        observability_update["level"] = CLI_LOG_LEVEL

    return base.model_copy(
        update={
            "graph": _overlay("graph", base.graph, graph_update),
            "engine": _overlay("engine", base.engine, engine_update),
            "observability": _overlay(
                "observability", base.observability, observability_update
            ),
        }
    )


def _overlay(section: str, settings: SettingsT, update: Dict[str, Any]) -> SettingsT:
    """Re-validate a settings section with command-line values applied.

    Raises:
        ConfigurationError: If an applied value fails validation.
    """
    if not update:
        return settings
    try:
        return type(settings).model_validate({**settings.model_dump(), **update})
    except ValidationError as e:
        error = e.errors()[0]
        setting = ".".join([section, *(str(part) for part in error["loc"])])
        raise ConfigurationError(
            f"Invalid value for {setting}: {error['msg']}",
            setting_name=setting,
        ) from e


def _node_id(value: str, config: AppConfig) -> NodeId:
    if config.graph.id_type == "int":
        try:
            return int(value)
        except ValueError as e:
            raise UnknownNodeError(
                f"Node id {value!r} is not an integer", cause=e, node_id=value
            )
    return value


def run(args: argparse.Namespace, service: PathfindingService, config: AppConfig) -> int:
    source = _node_id(args.source, config)

    if args.command == "path":
        target = _node_id(args.target, config)
        result = service.find_path_safe(source, target)
        if not result.found:
            print(f"No path found between {source} and {target}.")
            return 1
        print("Shortest path: " + " -> ".join(str(node) for node in result.path))
        print(f"Shortest distance: {result.distance}")
        return 0

    tree = service.build_tree(source)
    written = service.write_tree(tree, args.output)
    for edge in tree.edges():
        print(f"{edge.source} -> {edge.target} ({edge.weight})")
    print(f"Tree edges written to: {written}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
        configure_logging(config.observability)
        container = Container.create_default(config)
        service: PathfindingService = container.resolve(PathfindingService)
        return run(args, service, config)
    except PathGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
