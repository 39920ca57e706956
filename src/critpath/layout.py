"""Layered left-to-right layout of an activity graph.

Pipeline:
1. Longest-path layering over a Kahn topological order
2. Crossing reduction with a fixed number of barycenter sweeps
3. Coordinates: fixed layer/node gaps, each layer centred on the tallest one
4. Perpendicular offsets for edges that share a source node
5. Cubic curve geometry per edge

The result is plain data; drawing it is left to a renderer such as
``critpath.svg``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .config import LayoutConfig
from .cpm import CPMResult, EdgeSchedule
from .logger import checks_enabled, debug_enabled, get_logger
from .topology import EdgeLike, IndexedGraph, index_graph, kahn_order

INFINITY = float("inf")


@dataclass(frozen=True)
class Point:
    """A 2-D drawing coordinate (y grows downwards)."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NodeAnnotation:
    """Event-time labels placed above a node circle."""

    earliest: float
    latest: float
    earliest_anchor: Point  # Left of the circle
    latest_anchor: Point  # Right of the circle

    def to_dict(self) -> dict[str, Any]:
        return {
            "earliest": self.earliest,
            "latest": self.latest,
            "earliestAnchor": self.earliest_anchor.to_dict(),
            "latestAnchor": self.latest_anchor.to_dict(),
        }


@dataclass(frozen=True)
class EdgeGeometry:
    """Cubic curve for one activity, parallel to the input edge sequence."""

    from_node: str
    to_node: str
    weight: float
    offset: float
    start: Point
    control1: Point
    control2: Point
    end: Point
    label_anchor: Point
    schedule: EdgeSchedule | None = None

    @property
    def critical(self) -> bool:
        return self.schedule is not None and self.schedule.critical

    @property
    def control_points(self) -> tuple[Point, Point]:
        return (self.control1, self.control2)

    @property
    def path(self) -> str:
        """SVG path data for the curve."""
        return (
            f"M {self.start.x:g} {self.start.y:g} "
            f"C {self.control1.x:g} {self.control1.y:g}, "
            f"{self.control2.x:g} {self.control2.y:g}, "
            f"{self.end.x:g} {self.end.y:g}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_node,
            "to": self.to_node,
            "weight": self.weight,
            "offset": self.offset,
            "controlPoints": {
                "start": self.start.to_dict(),
                "control1": self.control1.to_dict(),
                "control2": self.control2.to_dict(),
                "end": self.end.to_dict(),
            },
            "labelAnchor": self.label_anchor.to_dict(),
            "critical": self.critical,
            "path": self.path,
        }


def _default_annotations() -> dict[str, NodeAnnotation]:
    return {}


@dataclass
class LayoutResult:
    """Output of ``compute_layout``."""

    layer: dict[str, int]
    order: list[list[str]]  # Nodes per layer, top to bottom
    position: dict[str, Point]
    edge_geometry: list[EdgeGeometry]
    width: float
    height: float
    radius: float
    annotations: dict[str, NodeAnnotation] = field(default_factory=_default_annotations)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "layer": dict(self.layer),
            "order": [list(nodes) for nodes in self.order],
            "position": {name: point.to_dict() for name, point in self.position.items()},
            "edgeGeometry": [geometry.to_dict() for geometry in self.edge_geometry],
            "width": self.width,
            "height": self.height,
            "radius": self.radius,
            "annotations": {name: note.to_dict() for name, note in self.annotations.items()},
        }


def compute_layout(
    nodes: Iterable[str],
    edges: Iterable[EdgeLike],
    cpm_result: CPMResult | None = None,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Lay out a graph for left-to-right drawing.

    Never fails. Isolated nodes land in layer 0. ``cpm_result``, when given,
    supplies node time annotations and per-edge schedule metrics.
    """
    config = config or LayoutConfig()
    logger = get_logger()

    graph = index_graph(nodes, edges)
    names = graph.node_order

    layer_index = assign_layers(graph)
    layers = _group_by_layer(layer_index)
    if debug_enabled():
        logger.debug(f"Initial layers: {_named(layers, names)}")

    layers = reduce_crossings(graph, layers, config.sweeps)
    if checks_enabled():
        logger.checks(f"Layer order after {config.sweeps} sweeps: {_named(layers, names)}")

    width = (
        config.margin_left
        + config.margin_right
        + config.layer_gap_x * max(0, len(layers) - 1)
        + config.canvas_padding
    )
    tallest = max([1, *(len(layer) for layer in layers)])
    height = (
        config.margin_top
        + config.margin_bottom
        + config.node_gap_y * (tallest - 1)
        + config.canvas_padding
    )
    inner_height = height - config.margin_top - config.margin_bottom

    position: dict[str, Point] = {}
    for layer_number, layer in enumerate(layers):
        block = config.node_gap_y * max(0, len(layer) - 1)
        top = config.margin_top + (inner_height - block) / 2
        x = config.margin_left + layer_number * config.layer_gap_x
        for slot, node in enumerate(layer):
            position[names[node]] = Point(x, top + slot * config.node_gap_y)

    offsets = edge_offsets(graph.sources, config.edge_spread)
    schedules = cpm_result.edges if cpm_result is not None else None
    radius = config.node_radius

    geometry: list[EdgeGeometry] = []
    for edge_id, edge in enumerate(graph.edges):
        p1 = position[edge.from_node]
        p2 = position[edge.to_node]
        offset = offsets[edge_id]
        start = Point(p1.x + radius, p1.y + offset)
        end = Point(p2.x - radius, p2.y + offset)
        reach = max(config.control_min, (end.x - start.x) / 3)
        geometry.append(
            EdgeGeometry(
                from_node=edge.from_node,
                to_node=edge.to_node,
                weight=edge.weight,
                offset=offset,
                start=start,
                control1=Point(start.x + reach, start.y),
                control2=Point(end.x - reach, end.y),
                end=end,
                label_anchor=Point(
                    (start.x + end.x) / 2, (start.y + end.y) / 2 - config.edge_label_lift
                ),
                schedule=schedules[edge_id] if schedules is not None else None,
            )
        )

    annotations: dict[str, NodeAnnotation] = {}
    if cpm_result is not None:
        label_dx = radius + config.node_label_gap
        label_dy = radius + config.node_label_lift
        for name, earliest, latest in zip(
            cpm_result.node_order, cpm_result.earliest, cpm_result.latest, strict=True
        ):
            point = position.get(name)
            if point is None:
                continue
            annotations[name] = NodeAnnotation(
                earliest=earliest,
                latest=latest,
                earliest_anchor=Point(point.x - label_dx, point.y - label_dy),
                latest_anchor=Point(point.x + label_dx, point.y - label_dy),
            )

    return LayoutResult(
        layer={names[i]: layer_index[i] for i in range(len(names))},
        order=_named(layers, names),
        position=position,
        edge_geometry=geometry,
        width=width,
        height=height,
        radius=radius,
        annotations=annotations,
    )


def assign_layers(graph: IndexedGraph) -> list[int]:
    """Longest-path layering: sources get 0, every edge target is below its source.

    Nodes left out of the topological order (only possible on cyclic input)
    stay in layer 0.
    """
    layer = [0] * len(graph.node_order)
    for u in kahn_order(graph):
        for edge_id in graph.outgoing[u]:
            v = graph.targets[edge_id]
            layer[v] = max(layer[v], layer[u] + 1)
    return layer


def reduce_crossings(graph: IndexedGraph, layers: list[list[int]], sweeps: int) -> list[list[int]]:
    """Reorder nodes within layers with alternating barycenter sweeps.

    Each sweep runs top-down (keys from predecessors in the layer above) and
    then bottom-up (keys from successors in the layer below). The sweep count
    is fixed; there is no convergence check.
    """
    layers = [list(layer) for layer in layers]
    for _ in range(sweeps):
        for i in range(1, len(layers)):
            layers[i] = _order_by_barycenter(
                layers[i], layers[i - 1], graph.incoming, graph.sources
            )
        for i in range(len(layers) - 2, -1, -1):
            layers[i] = _order_by_barycenter(
                layers[i], layers[i + 1], graph.outgoing, graph.targets
            )
    return layers


def _order_by_barycenter(
    current: list[int],
    neighbor_layer: list[int],
    adjacency: list[list[int]],
    endpoint: list[int],
) -> list[int]:
    """Stable sort of ``current`` by mean slot of neighbours in ``neighbor_layer``.

    ``adjacency[node]`` lists edge ids and ``endpoint[edge_id]`` the node on
    the other end. Nodes without neighbours in that layer sort last.
    """
    slots = {node: slot for slot, node in enumerate(neighbor_layer)}

    def key(node: int) -> float:
        positions = [
            slots[endpoint[edge_id]] for edge_id in adjacency[node] if endpoint[edge_id] in slots
        ]
        if not positions:
            return INFINITY
        return sum(positions) / len(positions)

    return sorted(current, key=key)


def edge_offsets(sources: list[int], spread: float) -> list[float]:
    """Perpendicular offset per edge, spread evenly among edges of the same source.

    The k edges leaving a node get offsets symmetric around zero, increasing
    with insertion rank and spanning ``spread`` in total. A lone edge gets 0.
    """
    totals: dict[int, int] = {}
    for source in sources:
        totals[source] = totals.get(source, 0) + 1

    seen: dict[int, int] = {}
    offsets: list[float] = []
    for source in sources:
        rank = seen.get(source, 0)
        seen[source] = rank + 1
        total = totals[source]
        if total > 1:
            offsets.append((rank - (total - 1) / 2) * (spread / (total - 1)))
        else:
            offsets.append(0.0)
    return offsets


def _group_by_layer(layer_index: list[int]) -> list[list[int]]:
    count = max(layer_index, default=-1) + 1
    layers: list[list[int]] = [[] for _ in range(count)]
    for node, layer in enumerate(layer_index):
        layers[layer].append(node)
    return layers


def _named(layers: list[list[int]], names: list[str]) -> list[list[str]]:
    return [[names[i] for i in layer] for layer in layers]
