"""Shared pytest fixtures and test helpers for forcemap tests."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from forcemap.config.settings import ForcemapSettings
from forcemap.domain.graph import GraphSnapshot
from forcemap.infrastructure.store import GraphStore

ABC_DATASET: dict[str, Any] = {
    "nodes": [
        {"id": "A", "group": 1},
        {"id": "B", "group": 2},
        {"id": "C", "group": 1},
    ],
    "links": [
        {"source": "A", "target": "B", "value": 1},
        {"source": "B", "target": "C", "value": 4},
    ],
}


def write_dataset(directory: Path, data: dict[str, Any], name: str = "graph.json") -> Path:
    """Write *data* as a JSON dataset file and return its path."""
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FORCEMAP_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("FORCEMAP_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def abc_snapshot() -> GraphSnapshot:
    """Nodes A, B, C with edges A-B and B-C."""
    return GraphSnapshot.from_dataset(ABC_DATASET)


@pytest.fixture
def settings(tmp_path: Path) -> ForcemapSettings:
    """Default settings with no config file in reach."""
    return ForcemapSettings.from_cli(start=tmp_path)


@pytest.fixture
def bundled_store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def abc_store(tmp_path: Path) -> GraphStore:
    return GraphStore(write_dataset(tmp_path, ABC_DATASET))


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from an empty temp directory.

    Use via ``@pytest.mark.usefixtures("_isolated_dir")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def abc_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """cwd with a forcemap.toml pointing at the A-B-C dataset."""
    write_dataset(tmp_path, ABC_DATASET)
    (tmp_path / "forcemap.toml").write_text('[dataset]\npath = "graph.json"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
