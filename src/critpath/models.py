"""Data models for critpath: activities, the session graph and its snapshots."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidMutationError
from .logger import get_logger


def normalize_name(value: Any) -> str:
    """Turn user input into a node identifier (trimmed, case preserved)."""
    return str(value or "").strip()


@dataclass(frozen=True)
class Edge:
    """A weighted activity between two events.

    The weight is the activity duration. Validation happens at the mutation
    boundary (``Graph.add_edge``), not here.
    """

    from_node: str
    to_node: str
    weight: float

    def __str__(self) -> str:
        return f"{self.from_node} -> {self.to_node} ({self.weight:g})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML/JSON serialization."""
        return {"from": self.from_node, "to": self.to_node, "weight": self.weight}


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable view of a graph at a given version.

    Both engines read snapshots, never the live graph.
    """

    nodes: tuple[str, ...]
    edges: tuple[Edge, ...]
    version: int = 0

    def is_empty(self) -> bool:
        return not self.nodes


def _default_node_dict() -> dict[str, None]:
    return {}


def _default_edge_list() -> list[Edge]:
    return []


@dataclass
class Graph:
    """The interactive session's evolving node set and edge sequence.

    Nodes are unique and kept in insertion order. Edges keep insertion order,
    and parallel edges between the same pair are distinct activities.
    Invalid mutations are discarded (``False`` is returned) unless the graph
    is strict, in which case ``InvalidMutationError`` is raised.
    """

    strict: bool = False
    _nodes: dict[str, None] = field(default_factory=_default_node_dict, init=False, repr=False)
    _edges: list[Edge] = field(default_factory=_default_edge_list, init=False, repr=False)
    version: int = field(default=0, init=False)

    @property
    def nodes(self) -> tuple[str, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(self._edges)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def add_node(self, name: Any) -> bool:
        """Add a node. Empty names and duplicates are ignored."""
        node = normalize_name(name)
        if not node:
            self._reject(f"Rejected node {name!r}: empty name")
            return False
        if node in self._nodes:
            return False
        self._nodes[node] = None
        self.version += 1
        get_logger().changes(f"Added node {node}")
        return True

    def add_edge(self, from_node: Any, to_node: Any, weight: Any) -> bool:
        """Append an activity, implicitly adding its endpoints.

        Rejects empty endpoints, self-loops and weights that are not finite
        non-negative numbers.
        """
        source = normalize_name(from_node)
        target = normalize_name(to_node)
        description = f"{from_node!r} -> {to_node!r} ({weight!r})"

        if not source or not target:
            self._reject(f"Rejected edge {description}: empty endpoint")
            return False
        if source == target:
            self._reject(f"Rejected edge {description}: self-loop")
            return False

        try:
            duration = float(weight)
        except (TypeError, ValueError, OverflowError):
            self._reject(f"Rejected edge {description}: weight is not a number")
            return False
        if not math.isfinite(duration) or duration < 0:
            self._reject(f"Rejected edge {description}: weight must be finite and >= 0")
            return False

        self._nodes.setdefault(source, None)
        self._nodes.setdefault(target, None)
        edge = Edge(source, target, duration)
        self._edges.append(edge)
        self.version += 1
        get_logger().changes(f"Added edge {edge}")
        return True

    def clear(self) -> None:
        """Remove all nodes and edges."""
        self._nodes.clear()
        self._edges.clear()
        self.version += 1
        get_logger().changes("Cleared graph")

    def snapshot(self) -> GraphSnapshot:
        """Return an immutable copy of the current state."""
        return GraphSnapshot(nodes=self.nodes, edges=self.edges, version=self.version)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "nodes": list(self._nodes),
            "edges": [edge.to_dict() for edge in self._edges],
        }

    def _reject(self, message: str) -> None:
        if self.strict:
            raise InvalidMutationError(message)
        get_logger().checks(message)


SAMPLE_EDGES = [
    ("A", "B", 3),
    ("A", "C", 2),
    ("B", "D", 2),
    ("C", "D", 4),
    ("C", "E", 2),
    ("D", "F", 3),
    ("E", "F", 2),
    ("F", "G", 3),
]


def sample_graph() -> Graph:
    """Build the seven-event demonstration project."""
    graph = Graph()
    for name in "ABCDEFG":
        graph.add_node(name)
    for from_node, to_node, weight in SAMPLE_EDGES:
        graph.add_edge(from_node, to_node, weight)
    return graph
