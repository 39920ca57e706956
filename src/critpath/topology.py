"""Graph indexing and topological ordering shared by the CPM and layout engines."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol


class EdgeLike(Protocol):
    """Anything with the fields of ``critpath.models.Edge``."""

    @property
    def from_node(self) -> str: ...

    @property
    def to_node(self) -> str: ...

    @property
    def weight(self) -> float: ...


@dataclass
class IndexedGraph:
    """Integer-indexed adjacency of a graph snapshot.

    ``outgoing[u]`` holds indices into ``edges`` in insertion order, so
    parallel edges stay distinct.
    """

    node_order: list[str]
    index: dict[str, int]
    edges: Sequence[EdgeLike]
    sources: list[int]
    targets: list[int]
    outgoing: list[list[int]]
    incoming: list[list[int]]

    @property
    def in_degree(self) -> list[int]:
        return [len(edge_ids) for edge_ids in self.incoming]


def index_graph(nodes: Iterable[str], edges: Iterable[EdgeLike]) -> IndexedGraph:
    """Index nodes in iteration order and scan the edges once.

    Edge endpoints missing from ``nodes`` are appended to the node order in
    the order they are first seen.
    """
    node_order = list(dict.fromkeys(nodes))
    index = {name: i for i, name in enumerate(node_order)}
    edge_list = list(edges)

    for edge in edge_list:
        for name in (edge.from_node, edge.to_node):
            if name not in index:
                index[name] = len(node_order)
                node_order.append(name)

    outgoing: list[list[int]] = [[] for _ in node_order]
    incoming: list[list[int]] = [[] for _ in node_order]
    sources: list[int] = []
    targets: list[int] = []
    for edge_id, edge in enumerate(edge_list):
        u = index[edge.from_node]
        v = index[edge.to_node]
        sources.append(u)
        targets.append(v)
        outgoing[u].append(edge_id)
        incoming[v].append(edge_id)

    return IndexedGraph(
        node_order=node_order,
        index=index,
        edges=edge_list,
        sources=sources,
        targets=targets,
        outgoing=outgoing,
        incoming=incoming,
    )


def kahn_order(graph: IndexedGraph) -> list[int]:
    """Return node indices in topological order (Kahn's algorithm).

    Zero in-degree nodes are released in index order, FIFO. If the graph has
    a cycle the result is shorter than the node count; callers decide whether
    that is an error.
    """
    in_degree = graph.in_degree
    queue = deque(i for i, degree in enumerate(in_degree) if degree == 0)
    order: list[int] = []

    while queue:
        u = queue.popleft()
        order.append(u)
        for edge_id in graph.outgoing[u]:
            v = graph.targets[edge_id]
            in_degree[v] -= 1
            if in_degree[v] == 0:
                queue.append(v)

    return order
