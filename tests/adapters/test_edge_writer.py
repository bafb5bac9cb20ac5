"""Tests for CSVEdgeWriter."""

import csv

import pytest

from pathgraph.adapters.graph import CSVEdgeWriter
from pathgraph.config import GraphConfig, OutputConfig
from pathgraph.domain.errors import GraphLoadError, GraphWriteError
from pathgraph.domain.models import Edge


@pytest.fixture
def writer():
    return CSVEdgeWriter(GraphConfig(), OutputConfig())


def test_writes_header_and_rows(writer, tmp_path):
    path = writer.write_edges(
        [Edge("A", "B", 1.0), Edge("B", "C", 2.5)],
        tmp_path / "out" / "tree.csv",
    )

    assert path == tmp_path / "out" / "tree.csv"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "source,target,weight",
        "A,B,1.0",
        "B,C,2.5",
    ]


def test_round_trip_preserves_exact_weights(writer, tmp_path):
    edges = [Edge("A", "B", 0.1 + 0.2), Edge("B", "C", 1 / 3), Edge("B", "C", 1e-12)]

    path = writer.write_edges(edges, tmp_path / "tree.csv")

    assert list(writer.read_edges(path)) == edges


def test_headerless_output(tmp_path):
    writer = CSVEdgeWriter(GraphConfig(), OutputConfig(write_header=False))

    path = writer.write_edges([Edge("A", "B", 2.0)], tmp_path / "tree.csv")

    assert path.read_text(encoding="utf-8") == "A,B,2.0\n"
    assert list(writer.read_edges(path)) == [Edge("A", "B", 2.0)]


def test_integer_ids_round_trip(tmp_path):
    writer = CSVEdgeWriter(GraphConfig(id_type="int"), OutputConfig())

    path = writer.write_edges([Edge(1, 2, 3.0)], tmp_path / "tree.csv")

    assert list(writer.read_edges(path)) == [Edge(1, 2, 3.0)]


def test_read_rejects_malformed_rows(writer, tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("source,target,weight\nA,B\n", encoding="utf-8")

    with pytest.raises(GraphLoadError) as excinfo:
        writer.read_edges(path)

    assert excinfo.value.line_number == 2


def test_read_missing_file(writer, tmp_path):
    with pytest.raises(GraphLoadError):
        writer.read_edges(tmp_path / "missing.csv")


def test_write_into_a_file_path_fails(writer, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(GraphWriteError):
        writer.write_edges([Edge("A", "B", 1.0)], blocker / "tree.csv")


def test_read_reports_csv_errors_as_load_errors(writer, tmp_path):
    path = tmp_path / "huge.csv"
    oversized = "x" * (csv.field_size_limit() + 1)
    path.write_text(f"A,B,{oversized}\n", encoding="utf-8")

    with pytest.raises(GraphLoadError, match="Malformed") as excinfo:
        writer.read_edges(path)

    assert excinfo.value.file_path == str(path)
    assert isinstance(excinfo.value.cause, csv.Error)
