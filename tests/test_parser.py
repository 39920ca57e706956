"""Tests for YAML graph parsing."""

from pathlib import Path

import pytest

from critpath.exceptions import InvalidMutationError, ParseError, ValidationError
from critpath.models import Edge, sample_graph
from critpath.parser import GraphParser, dump_graph
from tests.conftest import SAMPLE_YAML


class TestGraphParser:
    """Test GraphParser."""

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.yaml"
        path.write_text(SAMPLE_YAML, encoding="utf-8")

        graph = GraphParser().parse_file(path)

        assert graph.nodes == ("A", "B", "C", "D")
        assert graph.edges[3] == Edge("C", "D", 4.0)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="File not found"):
            GraphParser().parse_file(tmp_path / "nope.yaml")

    def test_malformed_yaml(self) -> None:
        with pytest.raises(ParseError, match="Failed to parse YAML"):
            GraphParser().parse_string("edges: [unclosed")

    def test_root_must_be_mapping(self) -> None:
        with pytest.raises(ParseError, match="dictionary"):
            GraphParser().parse_string("- A\n- B\n")

    def test_edge_missing_weight(self) -> None:
        with pytest.raises(ValidationError, match="Invalid YAML structure"):
            GraphParser().parse_string("edges:\n  - {from: A, to: B}\n")

    def test_nodes_only(self) -> None:
        graph = GraphParser().parse_string("nodes: [X, Y]\n")

        assert graph.nodes == ("X", "Y")
        assert graph.edges == ()

    def test_numeric_names(self) -> None:
        graph = GraphParser().parse_string("edges:\n  - {from: 1, to: 2, weight: 3}\n")

        assert graph.edges == (Edge("1", "2", 3.0),)

    def test_invalid_edges_skipped(self) -> None:
        text = """\
edges:
  - {from: A, to: B, weight: 1}
  - {from: B, to: B, weight: 1}
  - {from: B, to: C, weight: -4}
  - {from: B, to: C, weight: two}
"""
        graph = GraphParser().parse_string(text)

        assert graph.edges == (Edge("A", "B", 1.0),)
        assert graph.nodes == ("A", "B")

    def test_oversized_weight_skipped(self) -> None:
        text = f"edges:\n  - {{from: A, to: B, weight: {'9' * 400}}}\n"

        graph = GraphParser().parse_string(text)

        assert graph.edges == ()

    def test_null_node_names_discarded(self) -> None:
        graph = GraphParser().parse_string("nodes: [A, ~, B]\n")

        assert graph.nodes == ("A", "B")

    def test_strict_mode_raises(self) -> None:
        with pytest.raises(InvalidMutationError):
            GraphParser(strict=True).parse_string(
                "edges:\n  - {from: A, to: A, weight: 1}\n"
            )

    def test_dump_round_trip(self) -> None:
        graph = sample_graph()

        parsed = GraphParser().parse_string(dump_graph(graph))

        assert parsed.snapshot().nodes == graph.snapshot().nodes
        assert parsed.snapshot().edges == graph.snapshot().edges
