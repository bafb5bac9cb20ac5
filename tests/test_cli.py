"""Tests for the command-line entry point."""

import pytest

from pathgraph.cli import build_config, main, parse_args
from pathgraph.config import AppConfig, reset_config
from pathgraph.domain.errors import ConfigurationError
from pathgraph.monitoring import logger


@pytest.fixture(autouse=True)
def restore_logger():
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.delenv("PG_LOG_LEVEL", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def tables(tmp_path):
    nodes = tmp_path / "nodes.csv"
    edges = tmp_path / "edges.csv"
    nodes.write_text("id,name\nA,Alpha\nB,Beta\nC,Gamma\nD,Delta\nE,Isolated\n", encoding="utf-8")
    edges.write_text(
        "source,target,weight\nA,B,1\nB,C,2\nA,C,5\nC,D,1\n",
        encoding="utf-8",
    )
    return ["--nodes", str(nodes), "--edges", str(edges)]


@pytest.fixture
def mixed_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("1,One\n2,Two\n3,Three\n1,2,1.0\n2,3,2.0\n1,3,5.0\n", encoding="utf-8")
    return ["--graph", str(path), "--int-ids"]


def test_path_command(tables, capsys):
    assert main(["path", "A", "D", *tables]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["Shortest path: A -> B -> C -> D", "Shortest distance: 4.0"]


def test_no_path(tables, capsys):
    assert main(["path", "D", "A", *tables]) == 1

    assert "No path found between D and A." in capsys.readouterr().out


def test_undirected_flag(tables, capsys):
    assert main(["path", "D", "A", "--undirected", *tables]) == 0

    assert "Shortest path: D -> C -> B -> A" in capsys.readouterr().out


def test_unknown_source_exits_with_error(tables, capsys):
    assert main(["path", "Z", "A", *tables]) == 2

    assert capsys.readouterr().err == "Error: Unknown source node: 'Z'\n"


def test_invalid_delimiter_exits_with_error(tables, capsys):
    assert main(["path", "A", "B", "--delimiter", ";;", *tables]) == 2

    err = capsys.readouterr().err
    assert err.startswith("Error: Invalid value for graph.delimiter")
    assert "Traceback" not in err


def test_info_logs_only_when_requested(tables, capsys):
    assert main(["path", "A", "D", "--log-level", "INFO", *tables]) == 0

    assert "Graph loaded" in capsys.readouterr().err


def test_tree_command_writes_edges(tables, tmp_path, capsys):
    output = tmp_path / "out" / "tree.csv"

    assert main(["tree", "A", "--output", str(output), *tables]) == 0

    out = capsys.readouterr().out
    assert "A -> B (1.0)" in out
    assert "B -> C (2.0)" in out
    assert "C -> D (1.0)" in out
    assert f"Tree edges written to: {output}" in out
    assert output.read_text(encoding="utf-8").splitlines() == [
        "source,target,weight",
        "A,B,1.0",
        "B,C,2.0",
        "C,D,1.0",
    ]


def test_mixed_file_with_integer_ids(mixed_file, capsys):
    assert main(["path", "1", "3", *mixed_file]) == 0

    assert "Shortest path: 1 -> 2 -> 3" in capsys.readouterr().out


def test_non_integer_id_with_int_ids(mixed_file, capsys):
    assert main(["path", "one", "3", *mixed_file]) == 2

    assert "not an integer" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    missing = ["--nodes", str(tmp_path / "none.csv"), "--edges", str(tmp_path / "none.csv")]

    assert main(["path", "A", "B", *missing]) == 2

    assert "Error:" in capsys.readouterr().err


def test_nodes_and_graph_are_exclusive(capsys):
    with pytest.raises(SystemExit):
        parse_args(["path", "A", "B", "--nodes", "n.csv", "--graph", "g.txt"])


def test_build_config_overlays_options(tmp_path):
    args = parse_args(
        [
            "tree", "A",
            "--graph", str(tmp_path / "g.txt"),
            "--undirected",
            "--weight-column", "distance",
            "--weight-column", "toll",
            "--delimiter", ";",
            "--log-level", "DEBUG",
        ]
    )
    base = AppConfig()

    config = build_config(args, base)

    assert config.graph.source == "mixed"
    assert config.graph.graph_path == tmp_path / "g.txt"
    assert config.graph.directed is False
    assert config.graph.weight_columns == ["distance", "toll"]
    assert config.graph.delimiter == ";"
    assert config.observability.level == "DEBUG"
    assert base.graph.directed is True


def test_command_line_logs_warnings_by_default(tmp_path):
    args = parse_args(["path", "A", "B", "--nodes", str(tmp_path / "n.csv")])

    assert build_config(args, AppConfig()).observability.level == "WARNING"


def test_environment_log_level_is_kept(monkeypatch, tmp_path):
    monkeypatch.setenv("PG_LOG_LEVEL", "DEBUG")
    args = parse_args(["path", "A", "B", "--nodes", str(tmp_path / "n.csv")])

    assert build_config(args, AppConfig()).observability.level == "DEBUG"


def test_invalid_option_becomes_configuration_error(tmp_path):
    args = parse_args(
        ["path", "A", "B", "--nodes", str(tmp_path / "n.csv"), "--delimiter", "ab"]
    )

    with pytest.raises(ConfigurationError) as excinfo:
        build_config(args, AppConfig())

    assert excinfo.value.setting_name == "graph.delimiter"
