"""Configuration for the CPM and layout engines.

A single optional YAML file (critpath_config.yaml) holds both sections:

    cpm:
      tolerance: 1.0e-9
    layout:
      layer_gap_x: 200
      node_radius: 20
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from . import context

CONFIG_FILENAME = "critpath_config.yaml"


class CPMConfig(BaseModel):
    """Settings for the scheduling engine."""

    model_config = ConfigDict(frozen=True)

    # Slack below this magnitude counts as zero (floating-point noise guard)
    tolerance: float = Field(default=1e-9, gt=0)


class LayoutConfig(BaseModel):
    """Drawing constants for the layered layout (all in drawing units)."""

    model_config = ConfigDict(frozen=True)

    margin_left: float = 60
    margin_top: float = 40
    margin_right: float = 60
    margin_bottom: float = 40
    layer_gap_x: float = Field(default=180, gt=0)
    node_gap_y: float = Field(default=90, gt=0)
    node_radius: float = Field(default=24, ge=0)
    canvas_padding: float = 200

    # Crossing reduction: each sweep is one top-down plus one bottom-up pass
    sweeps: int = Field(default=4, ge=0)

    # Total perpendicular spread shared by edges leaving the same node
    edge_spread: float = Field(default=24, ge=0)
    # Minimum horizontal reach of curve control points
    control_min: float = Field(default=60, ge=0)

    edge_label_lift: float = 8
    edge_label_line_height: float = 14
    node_label_gap: float = 8
    node_label_lift: float = 6


class UnifiedConfig(BaseModel):
    """Complete configuration file contents."""

    cpm: CPMConfig = CPMConfig()
    layout: LayoutConfig = LayoutConfig()


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if data is None:
        return UnifiedConfig()
    if not isinstance(data, dict):
        raise ValueError("Config must contain a mapping at the root level")

    unknown = set(data) - {"cpm", "layout"}  # type: ignore[arg-type]
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    return UnifiedConfig.model_validate(data)


def discover_config(
    graph_path: Path | None = None, config_path: Path | None = None
) -> UnifiedConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. graph file directory / critpath_config.yaml
    4. Current directory / critpath_config.yaml
    """
    if config_path is not None:
        return load_unified_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return load_unified_config(ctx_config)

    candidates: list[Path] = []
    if graph_path is not None:
        candidates.append(Path(graph_path).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_unified_config(candidate)

    return UnifiedConfig()
