"""YAML parser for critpath graph files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Graph
from .schemas import GraphSchema


class GraphParser:
    """Parser for graph YAML files.

    Nodes and edges go through the ``Graph`` mutation methods, so invalid
    entries are dropped (or raise, when ``strict``) exactly as interactive
    input would be.
    """

    def __init__(self, *, strict: bool = False):
        self.strict = strict

    def parse_file(self, file_path: Path | str) -> Graph:
        """Parse a YAML file into a Graph."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        return self.parse_data(data)

    def parse_string(self, text: str) -> Graph:
        """Parse YAML text into a Graph."""
        try:
            data: Any = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e
        return self.parse_data(data)

    def parse_data(self, data: Any) -> Graph:
        """Build a Graph from already-loaded YAML data."""
        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        try:
            schema = GraphSchema(**data)  # type: ignore[arg-type]
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid YAML structure: {e}") from e

        graph = Graph(strict=self.strict)
        for name in schema.nodes:
            graph.add_node(name)

        rejected = 0
        for edge in schema.edges:
            if not graph.add_edge(edge.from_node, edge.to_node, edge.weight):
                rejected += 1
        if rejected:
            get_logger().changes(f"Ignored {rejected} invalid edge(s)")

        return graph


def dump_graph(graph: Graph) -> str:
    """Serialize a graph to YAML in the format GraphParser reads."""
    return yaml.safe_dump(graph.to_dict(), sort_keys=False, allow_unicode=True)
