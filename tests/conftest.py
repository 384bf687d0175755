"""Shared fixtures for TrustGraph tests."""

import pytest

from trust_graph.models.graph.builder import GraphBuilder
from trust_graph.models.graph.schema import PaymentGraph


@pytest.fixture
def scenario_lines():
    """Batch lines forming the chain 10 - 20 - 30."""
    return [
        "header",
        "1,10,20",
        "2,20,30",
    ]


@pytest.fixture
def scenario_graph(scenario_lines):
    """Frozen graph built from the chain scenario."""
    return GraphBuilder().build_from_lines(scenario_lines).graph


@pytest.fixture
def chain_graph():
    """Frozen path graph 1 - 2 - 3 - 4 - 5 - 6 - 7 plus an island 100 - 101."""
    graph = PaymentGraph()
    for a in range(1, 7):
        graph.add_edge(a, a + 1)
    graph.add_edge(100, 101)
    return graph.freeze()


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path
    return _write
