"""Tests for algorithm selection."""

import pytest

from pathgraph.domain.errors import UnsupportedAlgorithmError
from pathgraph.domain.models import Algorithm, Edge, Node
from pathgraph.graph import SOLVERS, ShortestPathEngine, create_engine


def test_every_algorithm_has_a_solver():
    assert set(SOLVERS) == set(Algorithm)


@pytest.mark.parametrize("name", ["dijkstra", "DIJKSTRA", " Dijkstra ", Algorithm.DIJKSTRA])
def test_parse_known_names(name):
    assert Algorithm.parse(name) is Algorithm.DIJKSTRA


@pytest.mark.parametrize("name", ["Bellman-Ford", "A*", "bfs"])
def test_unimplemented_algorithms_cannot_be_selected(name):
    with pytest.raises(UnsupportedAlgorithmError) as excinfo:
        Algorithm.parse(name)

    assert excinfo.value.algorithm == name
    assert "dijkstra" in str(excinfo.value)


def test_create_engine():
    engine = create_engine(
        "dijkstra",
        [Node(id="A"), Node(id="B")],
        [Edge("A", "B", 2.0)],
        directed=False,
    )

    assert isinstance(engine, ShortestPathEngine)
    assert engine.algorithm is Algorithm.DIJKSTRA
    assert engine.shortest_path("B", "A").distance == 2.0


def test_create_engine_rejects_unimplemented():
    with pytest.raises(UnsupportedAlgorithmError):
        create_engine("A*", [Node(id="A")], [])
