"""High-level analysis service over an interactive graph."""

from __future__ import annotations

from .config import CPMConfig, LayoutConfig
from .cpm import CPMResult, compute_schedule
from .exceptions import ValidationError
from .layout import LayoutResult, compute_layout
from .logger import get_logger
from .models import Graph, GraphSnapshot


class GraphAnalysisService:
    """Runs the CPM and layout engines for a live graph and caches the results.

    Results are derived, disposable caches: each is tied to the graph version
    it was computed from and is recomputed after any mutation. The engines
    only ever see an immutable snapshot, so a result never changes after it
    is returned.
    """

    def __init__(
        self,
        graph: Graph,
        cpm_config: CPMConfig | None = None,
        layout_config: LayoutConfig | None = None,
    ):
        """Initialize the service.

        Args:
            graph: The session graph; it is read, never modified
            cpm_config: Optional scheduling settings
            layout_config: Optional drawing settings (the viewport)
        """
        self.graph = graph
        self.cpm_config = cpm_config or CPMConfig()
        self.layout_config = layout_config or LayoutConfig()
        self._schedule: tuple[int, CPMResult] | None = None
        self._layout: tuple[int, LayoutConfig, LayoutResult] | None = None

    def schedule(self) -> CPMResult:
        """Return the CPM result for the current graph.

        Raises:
            ValidationError: If the graph has no nodes or no edges
            CycleError: If the graph contains a cycle
        """
        snapshot = self.graph.snapshot()
        if self._schedule is not None and self._schedule[0] == snapshot.version:
            return self._schedule[1]

        self._check_computable(snapshot)
        result = compute_schedule(snapshot.nodes, snapshot.edges, self.cpm_config)
        self._schedule = (snapshot.version, result)
        return result

    def layout(self) -> LayoutResult:
        """Return the layout for the current graph and viewport.

        The layout is only produced after a successful schedule, so cyclic
        graphs raise ``CycleError`` here too.
        """
        schedule = self.schedule()
        version = self.graph.version
        if (
            self._layout is not None
            and self._layout[0] == version
            and self._layout[1] == self.layout_config
        ):
            return self._layout[2]

        snapshot = self.graph.snapshot()
        result = compute_layout(snapshot.nodes, snapshot.edges, schedule, self.layout_config)
        self._layout = (version, self.layout_config, result)
        return result

    def set_layout_config(self, layout_config: LayoutConfig) -> None:
        """Change the viewport; only the layout is recomputed."""
        self.layout_config = layout_config
        self._layout = None

    def invalidate(self) -> None:
        """Drop all cached results."""
        self._schedule = None
        self._layout = None

    @staticmethod
    def _check_computable(snapshot: GraphSnapshot) -> None:
        if snapshot.is_empty():
            raise ValidationError("Add at least one node.")
        if not snapshot.edges:
            raise ValidationError("Add at least one edge.")
        get_logger().debug(
            f"Scheduling graph version {snapshot.version}: "
            f"{len(snapshot.nodes)} nodes, {len(snapshot.edges)} edges"
        )
