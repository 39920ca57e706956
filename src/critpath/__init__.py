"""critpath - Critical Path Method scheduling and layered layout of activity graphs.

Main entry points:
- Graph: the mutable session graph (validated add-node/add-edge/clear)
- compute_schedule: CPM engine (earliest/latest times, slack, critical paths)
- compute_layout: layered layout engine (layers, ordering, coordinates, curves)
- GraphAnalysisService: cached schedule and layout for a live graph
"""

from .config import CPMConfig, LayoutConfig, UnifiedConfig, load_unified_config
from .cpm import CPMResult, EdgeSchedule, compute_schedule
from .exceptions import (
    CritPathError,
    CycleError,
    InvalidMutationError,
    ParseError,
    ValidationError,
)
from .layout import EdgeGeometry, LayoutResult, NodeAnnotation, Point, compute_layout
from .models import Edge, Graph, GraphSnapshot, sample_graph
from .service import GraphAnalysisService

__version__ = "0.1.0"

__all__ = [
    # Graph model
    "Edge",
    "Graph",
    "GraphSnapshot",
    "sample_graph",
    # CPM engine
    "CPMResult",
    "EdgeSchedule",
    "compute_schedule",
    # Layout engine
    "EdgeGeometry",
    "LayoutResult",
    "NodeAnnotation",
    "Point",
    "compute_layout",
    # Service
    "GraphAnalysisService",
    # Configuration
    "CPMConfig",
    "LayoutConfig",
    "UnifiedConfig",
    "load_unified_config",
    # Errors
    "CritPathError",
    "CycleError",
    "InvalidMutationError",
    "ParseError",
    "ValidationError",
]
