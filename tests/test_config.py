"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from critpath import context
from critpath.config import (
    CONFIG_FILENAME,
    CPMConfig,
    LayoutConfig,
    UnifiedConfig,
    discover_config,
    load_unified_config,
)


class TestDefaults:
    """Default values match the reference drawing."""

    def test_cpm_defaults(self) -> None:
        assert CPMConfig().tolerance == 1e-9

    def test_layout_defaults(self) -> None:
        config = LayoutConfig()

        assert (config.layer_gap_x, config.node_gap_y, config.node_radius) == (180, 90, 24)
        assert config.sweeps == 4
        assert config.edge_spread == 24
        assert config.control_min == 60

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            LayoutConfig(sweeps=-1)
        with pytest.raises(PydanticValidationError):
            CPMConfig(tolerance=0)

    def test_configs_are_hashable(self) -> None:
        assert LayoutConfig() == LayoutConfig()
        assert hash(LayoutConfig()) == hash(LayoutConfig())


class TestLoadUnifiedConfig:
    """Test load_unified_config."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("cpm:\n  tolerance: 0.001\nlayout:\n  node_radius: 30\n")

        config = load_unified_config(path)

        assert config.cpm.tolerance == 0.001
        assert config.layout.node_radius == 30
        assert config.layout.layer_gap_x == 180

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_unified_config(path) == UnifiedConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_unified_config(tmp_path / "missing.yaml")

    def test_unknown_section(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("colors:\n  edge: red\n")

        with pytest.raises(ValueError, match="Unknown config sections: colors"):
            load_unified_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("layout:\n  node_gap_y: -5\n")

        with pytest.raises(ValueError):
            load_unified_config(path)


class TestDiscoverConfig:
    """Config discovery order."""

    def test_defaults_when_nothing_found(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert discover_config(tmp_path / "graph.yaml") == UnifiedConfig()

    def test_file_next_to_graph(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        project = tmp_path / "project"
        project.mkdir()
        (project / CONFIG_FILENAME).write_text("layout:\n  sweeps: 1\n")

        config = discover_config(project / "graph.yaml")

        assert config.layout.sweeps == 1

    def test_context_path_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("layout:\n  sweeps: 1\n")
        explicit = tmp_path / "other.yaml"
        explicit.write_text("layout:\n  sweeps: 2\n")
        context.set_config_path(explicit)

        config = discover_config(tmp_path / "graph.yaml")

        assert config.layout.sweeps == 2
