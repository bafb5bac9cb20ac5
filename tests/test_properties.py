"""Property checks of the engine against exhaustive search on small graphs."""

import math
import random

import pytest

from pathgraph.adapters.graph import CSVEdgeWriter
from pathgraph.config import GraphConfig, OutputConfig
from pathgraph.domain.models import Edge, Node, NoPathExists
from pathgraph.graph import ShortestPathEngine


def random_graph(seed, max_nodes=8):
    rng = random.Random(seed)
    count = rng.randint(1, max_nodes)
    nodes = [Node(id=i) for i in range(count)]
    edges = []
    for _ in range(rng.randint(0, count * 3)):
        u = rng.randrange(count)
        v = rng.randrange(count)
        # Integral weights keep float sums exact
        edges.append(Edge(u, v, float(rng.randint(0, 9))))
    return nodes, edges, rng.random() < 0.5


def brute_force_distance(nodes, edges, directed, source, target):
    """Cheapest simple path by exhaustive enumeration, or None."""
    # Only the lightest of parallel edges matters for simple paths
    adjacency = {node.id: {} for node in nodes}
    for edge in edges:
        pairs = [(edge.source, edge.target)]
        if not directed:
            pairs.append((edge.target, edge.source))
        for u, v in pairs:
            adjacency[u][v] = min(edge.weight, adjacency[u].get(v, math.inf))

    best = math.inf

    def walk(node, cost, visited):
        nonlocal best
        if cost >= best:
            return
        if node == target:
            best = cost
            return
        for neighbor, weight in adjacency[node].items():
            if neighbor not in visited:
                visited.add(neighbor)
                walk(neighbor, cost + weight, visited)
                visited.remove(neighbor)

    walk(source, 0.0, {source})
    return None if best == math.inf else best


SEEDS = range(40)


@pytest.mark.parametrize("seed", SEEDS)
def test_distances_match_exhaustive_search(seed):
    nodes, edges, directed = random_graph(seed)
    engine = ShortestPathEngine.build(nodes, edges, directed=directed)

    for source in nodes:
        for target in nodes:
            expected = brute_force_distance(nodes, edges, directed, source.id, target.id)
            result = engine.shortest_path(source.id, target.id)
            if expected is None:
                assert isinstance(result, NoPathExists)
            else:
                assert result.distance == expected


@pytest.mark.parametrize("seed", SEEDS)
def test_paths_are_consistent_with_weights_and_tree(seed):
    nodes, edges, directed = random_graph(seed)
    engine = ShortestPathEngine.build(nodes, edges, directed=directed)

    for source in nodes:
        tree = engine.shortest_path_tree(source.id)
        for target in nodes:
            result = engine.shortest_path(source.id, target.id)
            if not result.found:
                assert not tree.reaches(target.id)
                continue

            assert result.path[0] == source.id
            assert result.path[-1] == target.id
            assert engine.path_distance(result.path) == result.distance
            assert tree.distance_to(target.id) == result.distance
            if source.id != target.id:
                assert len(result.path) > 1


@pytest.mark.parametrize("seed", SEEDS)
def test_self_query_is_single_node(seed):
    nodes, edges, directed = random_graph(seed)
    engine = ShortestPathEngine.build(nodes, edges, directed=directed)

    for node in nodes:
        result = engine.shortest_path(node.id, node.id)
        assert result.path == (node.id,)
        assert result.distance == 0.0


@pytest.mark.parametrize("seed", range(10))
def test_tree_edges_round_trip_through_writer(seed, tmp_path):
    nodes, edges, directed = random_graph(seed)
    engine = ShortestPathEngine.build(nodes, edges, directed=directed)
    writer = CSVEdgeWriter(GraphConfig(id_type="int"), OutputConfig())

    tree = engine.shortest_path_tree(nodes[0].id)
    path = writer.write_edges(tree.edges(), tmp_path / "tree.csv")
    reread = writer.read_edges(path)

    assert sorted(edge.as_tuple() for edge in reread) == sorted(
        edge.as_tuple() for edge in tree.edges()
    )
