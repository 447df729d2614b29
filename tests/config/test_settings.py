"""Tests for ForcemapSettings — unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from forcemap.config.settings import ForcemapSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.dataset.path is None
        assert settings.layout.seed == 42
        assert settings.layout.charge_strength == -30.0
        assert settings.render.width == 800
        assert settings.groups.label_for(2) == "services"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ForcemapSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text("[layout]\nseed = 7\ntheta = 0\n")
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.layout.seed == 7
        assert settings.layout.theta == 0
        assert settings.layout.link_distance == 30.0  # default preserved

    def test_discovered_by_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text("[render]\nwidth = 1930\n")
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        settings = ForcemapSettings.from_cli(start=deep)
        assert settings.render.width == 1930
        assert settings.config_path == (tmp_path / "forcemap.toml").resolve()

    def test_relative_dataset_path_resolved_against_config(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text('[dataset]\npath = "data/graph.json"\n')
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.dataset.path == tmp_path.resolve() / "data" / "graph.json"

    def test_group_labels_from_string_keys(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text('[groups.labels]\n1 = "warehouse"\n')
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.groups.label_for(1) == "warehouse"
        assert settings.groups.label_for(9) == "group-9"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text("[layout]\nseed = 99\n")
        settings = ForcemapSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.layout.seed == 99
        assert settings.config_path == custom

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="not found"):
            ForcemapSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text("[layout\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ForcemapSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ForcemapSettings.from_cli(start=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCEMAP_QUIET", "true")
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.quiet is True

    def test_nested_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "forcemap.toml").write_text("[layout]\nseed = 7\n")
        monkeypatch.setenv("FORCEMAP_LAYOUT__SEED", "11")
        settings = ForcemapSettings.from_cli(start=tmp_path)
        assert settings.layout.seed == 11


class TestLayoutConfig:
    def test_alpha_decay_derived_from_alpha_min(self, tmp_path: Path) -> None:
        layout = ForcemapSettings.from_cli(start=tmp_path).layout
        # 300 steps of decay take alpha from 1 down to alpha_min.
        assert (1 - layout.resolved_alpha_decay()) ** 300 == pytest.approx(layout.alpha_min)

    def test_explicit_alpha_decay(self, tmp_path: Path) -> None:
        (tmp_path / "forcemap.toml").write_text("[layout]\nalpha_decay = 0.05\n")
        layout = ForcemapSettings.from_cli(start=tmp_path).layout
        assert layout.resolved_alpha_decay() == 0.05
