"""Pytest configuration and fixtures for critpath tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from critpath import context
from critpath.logger import reset_logger
from critpath.models import Edge, Graph


def edges(*spec: tuple[str, str, float]) -> list[Edge]:
    """Create a list of Edge objects from (from, to, weight) tuples.

    Example:
        compute_schedule(["A", "B"], edges(("A", "B", 3)))
    """
    return [Edge(from_node, to_node, float(weight)) for from_node, to_node, weight in spec]


def graph_of(*spec: tuple[str, str, float], nodes: tuple[str, ...] = ()) -> Graph:
    """Build a Graph through the mutation API."""
    graph = Graph()
    for name in nodes:
        graph.add_node(name)
    for from_node, to_node, weight in spec:
        assert graph.add_edge(from_node, to_node, weight)
    return graph


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset logger and CLI context around each test for isolation."""
    reset_logger()
    context.reset()
    yield
    reset_logger()
    context.reset()


@pytest.fixture
def chain_graph() -> Graph:
    """A -> B -> C -> D with weights 3, 2, 4."""
    return graph_of(("A", "B", 3), ("B", "C", 2), ("C", "D", 4))


@pytest.fixture
def diamond_graph() -> Graph:
    """Diamond where A -> C -> D is critical and A -> B -> D has one unit of slack."""
    return graph_of(("A", "B", 3), ("A", "C", 2), ("B", "D", 2), ("C", "D", 4))


SAMPLE_YAML = """\
nodes: [A, B, C, D]
edges:
  - {from: A, to: B, weight: 3}
  - {from: A, to: C, weight: 2}
  - {from: B, to: D, weight: 2}
  - {from: C, to: D, weight: 4}
"""
