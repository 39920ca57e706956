"""Critical Path Method scheduling over a weighted activity DAG.

Events are nodes and activities are weighted edges. The engine runs:
1. Kahn topological sort (a short order means a cycle)
2. Forward pass for earliest event times E
3. Backward pass for latest event times L
4. Per-activity ES/EF/LS/LF/slack
5. Depth-first enumeration of critical paths over zero-slack activities
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .config import CPMConfig
from .exceptions import CycleError
from .logger import checks_enabled, debug_enabled, get_logger
from .topology import EdgeLike, index_graph, kahn_order


@dataclass(frozen=True)
class EdgeSchedule:
    """An activity annotated with its schedule metrics."""

    from_node: str
    to_node: str
    weight: float
    es: float  # Earliest start
    ef: float  # Earliest finish
    ls: float  # Latest start
    lf: float  # Latest finish
    slack: float
    critical: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_node,
            "to": self.to_node,
            "weight": self.weight,
            "ES": self.es,
            "EF": self.ef,
            "LS": self.ls,
            "LF": self.lf,
            "slack": self.slack,
            "critical": self.critical,
        }


def _default_paths() -> list[list[str]]:
    return []


@dataclass
class CPMResult:
    """Output of ``compute_schedule``.

    ``earliest`` and ``latest`` are parallel to ``node_order``; ``edges`` is
    parallel to the input edge sequence.
    """

    node_order: list[str]
    earliest: list[float]
    latest: list[float]
    edges: list[EdgeSchedule]
    duration: float
    critical_paths: list[list[str]] = field(default_factory=_default_paths)

    def __post_init__(self) -> None:
        self._positions = {name: i for i, name in enumerate(self.node_order)}

    def earliest_of(self, node: str) -> float:
        """Earliest event time of a node (KeyError if unknown)."""
        return self.earliest[self._positions[node]]

    def latest_of(self, node: str) -> float:
        """Latest event time of a node (KeyError if unknown)."""
        return self.latest[self._positions[node]]

    @property
    def critical_edges(self) -> list[EdgeSchedule]:
        return [edge for edge in self.edges if edge.critical]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "nodeOrder": list(self.node_order),
            "earliest": list(self.earliest),
            "latest": list(self.latest),
            "edges": [edge.to_dict() for edge in self.edges],
            "duration": self.duration,
            "criticalPaths": [list(path) for path in self.critical_paths],
        }


def compute_schedule(
    nodes: Iterable[str],
    edges: Iterable[EdgeLike],
    config: CPMConfig | None = None,
) -> CPMResult:
    """Compute the CPM schedule of a DAG.

    Args:
        nodes: Node identifiers; their iteration order becomes ``node_order``
        edges: Activities with ``from_node``, ``to_node`` and ``weight``
        config: Optional engine settings (critical tolerance)

    Returns:
        CPMResult with event times, activity metrics and critical paths

    Raises:
        CycleError: If the graph is not acyclic. No partial result is produced.
    """
    config = config or CPMConfig()
    logger = get_logger()

    graph = index_graph(nodes, edges)
    names = graph.node_order
    topo = kahn_order(graph)
    if len(topo) != len(names):
        stuck = sorted(set(names) - {names[i] for i in topo})
        logger.debug(f"Topological sort stalled; nodes on or behind a cycle: {stuck}")
        raise CycleError()
    if debug_enabled():
        logger.debug(f"Topological order: {[names[i] for i in topo]}")

    earliest = [0.0] * len(names)
    for u in topo:
        for edge_id in graph.outgoing[u]:
            v = graph.targets[edge_id]
            earliest[v] = max(earliest[v], earliest[u] + graph.edges[edge_id].weight)

    duration = max(earliest, default=0.0)

    latest = [duration] * len(names)
    for u in reversed(topo):
        for edge_id in graph.outgoing[u]:
            v = graph.targets[edge_id]
            latest[u] = min(latest[u], latest[v] - graph.edges[edge_id].weight)

    trace = checks_enabled()
    scheduled: list[EdgeSchedule] = []
    for edge_id, edge in enumerate(graph.edges):
        es = earliest[graph.sources[edge_id]]
        ef = es + edge.weight
        lf = latest[graph.targets[edge_id]]
        ls = lf - edge.weight
        slack = ls - es
        scheduled.append(
            EdgeSchedule(
                from_node=edge.from_node,
                to_node=edge.to_node,
                weight=edge.weight,
                es=es,
                ef=ef,
                ls=ls,
                lf=lf,
                slack=slack,
                critical=abs(slack) < config.tolerance,
            )
        )
        if trace:
            logger.checks(
                f"  {edge.from_node} -> {edge.to_node}: ES={es:g} EF={ef:g} "
                f"LS={ls:g} LF={lf:g} slack={slack:g}"
            )

    # Critical-only adjacency; parallel critical edges collapse to one step
    critical_next: list[list[int]] = [[] for _ in names]
    for edge_id, item in enumerate(scheduled):
        if item.critical:
            u = graph.sources[edge_id]
            v = graph.targets[edge_id]
            if v not in critical_next[u]:
                critical_next[u].append(v)

    in_degree = graph.in_degree
    starts = [i for i in topo if in_degree[i] == 0]
    ends = {i for i in topo if abs(earliest[i] - duration) < config.tolerance}
    critical_paths = [
        [names[i] for i in path] for path in _enumerate_paths(starts, ends, critical_next)
    ]

    logger.changes(f"Project duration: {duration:g}")
    for path in critical_paths:
        logger.changes(f"Critical path: {' -> '.join(path)}")

    return CPMResult(
        node_order=list(names),
        earliest=earliest,
        latest=latest,
        edges=scheduled,
        duration=duration,
        critical_paths=critical_paths,
    )


def _enumerate_paths(
    starts: list[int], ends: set[int], successors: list[list[int]]
) -> list[list[int]]:
    """Depth-first enumeration of start-to-end paths.

    A path stops at the first end node it reaches. Uses an explicit stack;
    the successor graph is a subgraph of a DAG, so no visited set is needed.
    """
    paths: list[list[int]] = []
    for start in starts:
        path = [start]
        stack = [iter(()) if start in ends else iter(successors[start])]
        if start in ends:
            paths.append(list(path))
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                path.pop()
                continue
            path.append(nxt)
            if nxt in ends:
                paths.append(list(path))
                stack.append(iter(()))
            else:
                stack.append(iter(successors[nxt]))
    return paths
