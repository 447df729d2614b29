"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, forcemap.toml only contains
overrides. An empty file (or none at all) lays out the bundled dataset.
"""

from __future__ import annotations

import math
from pathlib import Path

from pydantic import BaseModel, Field


class DatasetConfig(BaseModel):
    """[dataset] section."""

    model_config = {"frozen": True}

    # None means the dataset bundled with the package.
    path: Path | None = None


class LayoutConfig(BaseModel):
    """[layout] section — force simulation parameters."""

    model_config = {"frozen": True}

    seed: int = 42
    alpha_min: float = Field(default=0.001, gt=0, lt=1)
    # Derived from alpha_min so the simulation settles in ~300 steps when unset.
    alpha_decay: float | None = Field(default=None, ge=0, lt=1)
    velocity_decay: float = Field(default=0.4, ge=0, le=1)
    charge_strength: float = -30.0
    theta: float = Field(default=0.9, ge=0)
    distance_min: float = Field(default=1.0, ge=0)
    distance_max: float = math.inf
    link_distance: float = Field(default=30.0, ge=0)
    link_iterations: int = Field(default=1, ge=1)
    center_strength: float = Field(default=1.0, ge=0, le=1)
    initial_radius: float = Field(default=10.0, gt=0)
    reheat_alpha: float = Field(default=0.3, gt=0, le=1)
    max_steps: int = Field(default=1000, ge=1)

    def resolved_alpha_decay(self) -> float:
        if self.alpha_decay is not None:
            return self.alpha_decay
        return 1 - self.alpha_min ** (1 / 300)


# d3.schemeTableau10
TABLEAU10: tuple[str, ...] = (
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
)


class RenderConfig(BaseModel):
    """[render] section — static export appearance."""

    model_config = {"frozen": True}

    width: int = Field(default=800, gt=0)
    height: int = Field(default=900, gt=0)
    node_radius: float = Field(default=5.0, gt=0)
    node_stroke: str = "#fff"
    node_stroke_width: float = 1.5
    link_stroke: str = "#999"
    link_stroke_opacity: float = 0.6
    palette: tuple[str, ...] = TABLEAU10


class GroupsConfig(BaseModel):
    """[groups] section — display labels keyed by group ordinal."""

    model_config = {"frozen": True}

    labels: dict[int, str] = Field(
        default_factory=lambda: {1: "tables", 2: "services", 3: "web", 4: "batch"}
    )

    def label_for(self, group: int) -> str:
        return self.labels.get(group, f"group-{group}")
